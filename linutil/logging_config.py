from __future__ import annotations

import logging
import os
from typing import Optional

FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """
    Configure the root logger once per process.

    With log_file set, records go to that file only; the TUI owns the
    terminal, so nothing may be written to stderr while it runs.
    """
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, str(level).upper(), logging.WARNING))

    if root.level > logging.DEBUG:
        logging.getLogger("asyncio").setLevel(logging.WARNING)
