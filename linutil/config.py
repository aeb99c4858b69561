from __future__ import annotations
import json, os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

from .catalog import DEFAULT_DIR
from .systeminfo import OS_RELEASE

CONFIG_FILE = os.path.expanduser("~/.config/linutil/config.json")
CACHE_DIR = os.path.expanduser("~/.cache/linutil")

@dataclass(frozen=True)
class Config:
    scripts_dir: str = DEFAULT_DIR
    os_release: str = OS_RELEASE
    log_level: str = "INFO"
    log_file: str = os.path.join(CACHE_DIR, "linutil.log")
    history_log: str = os.path.join(CACHE_DIR, "history.log")

    def override(self, **kw: Optional[str]) -> "Config":
        return replace(self, **{k: v for k, v in kw.items() if v})

def load_json_safe(path: str, default: Any) -> Any:
    try:
        if not os.path.exists(path):
            return default
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
        if not raw.strip():
            return default
        return json.loads(raw)
    except (OSError, ValueError):
        return default

def load_config(path: str = CONFIG_FILE) -> Config:
    raw = load_json_safe(path, {})
    if not isinstance(raw, dict):
        raw = {}
    known = {f.name for f in fields(Config)}
    kw: Dict[str, str] = {k: os.path.expanduser(str(v)) for k, v in raw.items() if k in known and v}
    return Config(**kw)
