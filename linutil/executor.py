from __future__ import annotations
import logging
import os
import shlex
import subprocess
import tempfile
from typing import List, Tuple

from rich.markup import escape

from .history import log_history
from .models import ScriptEntry, System

logger = logging.getLogger(__name__)

DEFAULT_INTERPRETER = ["/bin/sh"]

def run_capture(cmd: List[str], env=None) -> Tuple[int, str]:
    # the TUI owns the terminal, scripts never read from it
    try:
        p = subprocess.run(
            cmd, stdin=subprocess.DEVNULL, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True, env=env
        )
        return p.returncode, p.stdout
    except FileNotFoundError:
        return 127, f"Command not found: {cmd[0]}"

def script_env(system: System) -> dict:
    env = dict(os.environ)
    if system.package_manager is not None:
        env["PACKAGER"] = system.package_manager.value
    env["DTYPE"] = system.id
    return env

def interpreter(text: str) -> List[str]:
    """Split the shebang into interpreter plus arguments (`#!/bin/sh -e` keeps `-e`)."""
    first = text.split("\n", 1)[0]
    if first.startswith("#!"):
        parts = shlex.split(first[2:])
        if parts:
            return parts
    return list(DEFAULT_INTERPRETER)

def script_body(entry: ScriptEntry, action: str) -> str:
    """Scripts defining run()/revert() get the requested entry point called at the end."""
    text = entry.text
    if entry.defines(action):
        text = text.rstrip("\n") + f"\n{action}\n"
    elif action != "run":
        raise ValueError(f"{entry.path} has no {action}() entry point")
    return text

def run_script(entry: ScriptEntry, system: System, action: str = "run") -> Tuple[int, str]:
    logger.info("%s %s", action, entry.path)
    text = script_body(entry, action)
    fd, path = tempfile.mkstemp(prefix=f"linutil-{entry.name}-", suffix=".sh")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        rc, out = run_capture(interpreter(text) + [path], env=script_env(system))
    finally:
        os.unlink(path)
    if rc != 0:
        logger.warning("%s exited with rc=%d", entry.path, rc)
    return rc, out

def run_selection(entries: List[ScriptEntry], system: System, history_log: str, action: str = "run") -> Tuple[int, str]:
    """Run entries in order; returns the first non-zero rc (or 0) and the combined output."""
    first_rc = 0
    parts: List[str] = []
    for e in entries:
        rc, out = run_script(e, system, action)
        log_history(history_log, action, [e.path] + out.splitlines(), rc)
        parts.append(f"[b]{escape(e.path)}[/b] {action} rc={rc}\n{escape(out)}")
        first_rc = first_rc or rc
    return first_rc, "\n".join(parts)
