#!/usr/bin/env python3
"""
Build step: flatten the modular shell scripts under ``tabs/`` into
self-contained scripts that ship inside the package.

Every ``. file`` / ``source file`` line is replaced by the raw contents of
the named file (resolved against the including script's directory). Inlining
is one level deep: included text is not scanned again.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from .errors import BuildError
from .logging_config import setup_logging
from .models import ScriptFile

logger = logging.getLogger(__name__)

SCRIPT_PATH = "tabs"
OUT_PATH = os.path.join("linutil", "commands")
DEPS_FILE = ".rerun-if-changed"
SHEBANG = b"#!"
INCLUDE_PREFIXES = (". ", "source ")

def has_shell_ext(path: str) -> bool:
    ext = os.path.splitext(path)[1]
    return ext in ("", ".sh")

def starts_with_shebang(path: str) -> bool:
    try:
        with open(path, "rb") as f:
            return f.read(2) == SHEBANG
    except OSError:
        return False

def get_script_list(root: str) -> List[str]:
    """Recursively list candidate scripts below root, sorted for stable output."""
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        raise BuildError(f"cannot read script directory {root}: {exc}") from exc

    out: List[str] = []
    for entry in entries:
        if entry.is_dir():
            out.extend(get_script_list(entry.path))
        elif has_shell_ext(entry.path) and starts_with_shebang(entry.path):
            out.append(entry.path)
    return out

def _read_text(path: str, what: str) -> str:
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise BuildError(f"cannot read {what} {path}: {exc}") from exc

def split_lines(text: str) -> List[str]:
    if not text:
        return []
    if text.endswith("\n"):
        text = text[:-1]
    return [ln[:-1] if ln.endswith("\r") else ln for ln in text.split("\n")]

def read_script(path: str, root: str) -> ScriptFile:
    return ScriptFile(path=os.path.relpath(path, root), lines=split_lines(_read_text(path, "script")))

def is_include(line: str) -> bool:
    return line.startswith(INCLUDE_PREFIXES)

def transclude(script: ScriptFile, root: str) -> str:
    filedir = os.path.dirname(os.path.join(root, script.path))
    out: List[str] = []
    for line in script.lines:
        if is_include(line):
            target = os.path.join(filedir, line.split(" ", 1)[1])
            logger.debug("%s: inlining %s", script.path, target)
            out.append(_read_text(target, "include target"))
        else:
            out.append(line)
    return "\n".join(out)

def write_out(rel_path: str, content: str, out_dir: str) -> str:
    out_file = os.path.join(out_dir, rel_path)
    os.makedirs(os.path.dirname(out_file) or ".", exist_ok=True)
    with open(out_file, "wb") as f:
        f.write(content.encode("utf-8"))
    return out_file

def build_scripts(src_dir: str = SCRIPT_PATH, out_dir: str = OUT_PATH) -> List[str]:
    """
    Flatten every script below src_dir into out_dir.

    Returns the re-run dependencies (this module plus every discovered
    script) and records them in ``out_dir/.rerun-if-changed``.
    """
    deps = [os.path.abspath(__file__)]
    files = get_script_list(src_dir)
    for path in files:
        deps.append(os.path.abspath(path))
        script = read_script(path, src_dir)
        write_out(script.path, transclude(script, src_dir), out_dir)
        logger.info("built %s", script.path)

    os.makedirs(out_dir, exist_ok=True)
    with open(os.path.join(out_dir, DEPS_FILE), "w", encoding="utf-8") as f:
        for d in deps:
            f.write(f"rerun-if-changed={d}\n")
    logger.info("flattened %d scripts into %s", len(files), out_dir)
    return deps

def read_deps(out_dir: str) -> List[str]:
    path = os.path.join(out_dir, DEPS_FILE)
    if not os.path.exists(path):
        return []
    with open(path, "r", encoding="utf-8") as f:
        return [ln.split("=", 1)[1] for ln in f.read().splitlines() if "=" in ln]

def needs_rebuild(out_dir: str) -> bool:
    manifest = os.path.join(out_dir, DEPS_FILE)
    if not os.path.exists(manifest):
        return True
    stamp = os.path.getmtime(manifest)
    for dep in read_deps(out_dir):
        if not os.path.exists(dep) or os.path.getmtime(dep) > stamp:
            return True
    return False

def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="linutil-build", description="Flatten modular shell scripts.")
    ap.add_argument("source", nargs="?", default=SCRIPT_PATH)
    ap.add_argument("dest", nargs="?", default=OUT_PATH)
    ap.add_argument("--if-changed", action="store_true", help="skip when no dependency changed")
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args(argv)
    setup_logging(args.log_level)

    if args.if_changed and not needs_rebuild(args.dest):
        logger.info("%s is up to date", args.dest)
        return 0
    try:
        build_scripts(args.source, args.dest)
    except BuildError as exc:
        print(f"linutil-build: {exc}", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
