from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import re
from typing import List, Optional, Tuple

class PackageManager(str, Enum):
    DNF = "dnf"
    APT_GET = "apt-get"
    PACMAN = "pacman"
    ZYPPER = "zypper"

@dataclass(frozen=True)
class System:
    id: str = "unknown"
    pretty_name: str = "unknown"
    package_manager: Optional[PackageManager] = None

@dataclass
class ScriptFile:
    path: str  # relative to the source root
    lines: List[str]

@dataclass(frozen=True)
class ScriptEntry:
    path: str  # posix, relative to the catalog root
    data: bytes

    @property
    def tab(self) -> str:
        return self.path.split("/", 1)[0] if "/" in self.path else ""

    @property
    def name(self) -> str:
        base = self.path.rsplit("/", 1)[-1]
        return base[:-3] if base.endswith(".sh") else base

    @property
    def text(self) -> str:
        return self.data.decode("utf-8", errors="replace")

    def defines(self, fn: str) -> bool:
        """True when the script declares a shell function named fn."""
        return re.search(rf"^\s*{re.escape(fn)}\s*\(\)\s*\{{", self.text, re.M) is not None

class FloatEvent(Enum):
    NONE = "none"
    CONFIRM = "confirm"
    ABORT = "abort"

@dataclass(frozen=True)
class Shortcut:
    name: str
    keys: Tuple[str, ...]

    def __str__(self) -> str:
        return f"{self.name}: {', '.join(self.keys)}"
