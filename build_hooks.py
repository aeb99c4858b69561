"""
setuptools hook: flatten ``tabs/`` into ``linutil/commands`` whenever
build_py runs, so wheels and editable installs ship a complete catalog.
"""
from __future__ import annotations

import os
import sys

from setuptools.command.build_py import build_py

ROOT = os.path.dirname(os.path.abspath(__file__))

def flatten_into(out_root: str, root: str = ROOT) -> list:
    # loaded by file path at build time, before linutil is importable
    if root not in sys.path:
        sys.path.insert(0, root)
    from linutil.build import build_scripts

    return build_scripts(os.path.join(root, "tabs"), os.path.join(out_root, "linutil", "commands"))

class BuildPyWithScripts(build_py):
    def run(self) -> None:
        super().run()
        out_root = ROOT if getattr(self, "editable_mode", False) else self.build_lib
        flatten_into(out_root)
