from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, List, Optional, Tuple

from .build import DEPS_FILE
from .models import ScriptEntry, System
from .systeminfo import known_distros

logger = logging.getLogger(__name__)

DEFAULT_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "commands")

class Catalog:
    """Read-only view of the flattened scripts, addressed by relative path."""

    def __init__(self, entries: Iterable[ScriptEntry]):
        self._entries: Dict[str, ScriptEntry] = {e.path: e for e in sorted(entries, key=lambda e: e.path)}

    @classmethod
    def load(cls, root: str = DEFAULT_DIR) -> "Catalog":
        if not os.path.isdir(root):
            logger.warning("no built scripts at %s (run linutil-build)", root)
            return cls([])
        out: List[ScriptEntry] = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            for fn in sorted(filenames):
                if fn == DEPS_FILE:
                    continue
                full = os.path.join(dirpath, fn)
                rel = os.path.relpath(full, root).replace(os.sep, "/")
                if "/" not in rel:
                    # shared includes such as common-script.sh; never offered as actions
                    logger.debug("skipping top-level script %s", rel)
                    continue
                with open(full, "rb") as f:
                    data = f.read()
                out.append(ScriptEntry(path=rel, data=data))
        logger.info("loaded %d scripts from %s", len(out), root)
        return cls(out)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries.values())

    def get(self, path: str) -> Optional[ScriptEntry]:
        return self._entries.get(path)

    def paths(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def tabs(self) -> List[str]:
        seen: List[str] = []
        for e in self._entries.values():
            if e.tab and e.tab not in seen:
                seen.append(e.tab)
        return seen

    def entries(self, tab: str) -> List[ScriptEntry]:
        return [e for e in self._entries.values() if e.tab == tab]

    def for_system(self, system: System) -> "Catalog":
        """Drop entries filed under another distro's directory."""
        distros = set(known_distros())

        def offered(e: ScriptEntry) -> bool:
            dirs = e.path.split("/")[:-1]
            return all(d == system.id for d in dirs if d in distros)

        return Catalog(e for e in self._entries.values() if offered(e))
