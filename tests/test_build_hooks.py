"""
Tests for the setuptools hook that ships flattened scripts with the package.
"""

from pathlib import Path

from setuptools.command.build_py import build_py

from build_hooks import BuildPyWithScripts, flatten_into
from linutil.catalog import Catalog


def test_flatten_into_package_tree(project_root: Path, tmp_path: Path):
    flatten_into(str(tmp_path), root=str(project_root))
    commands = tmp_path / "linutil" / "commands"
    assert (commands / "applications-setup" / "alacritty-setup.sh").is_file()
    assert (commands / ".rerun-if-changed").is_file()
    cat = Catalog.load(str(commands))
    assert "applications-setup/alacritty-setup.sh" in cat.paths()
    assert "common-script.sh" not in cat.paths()


def test_hook_extends_build_py():
    assert issubclass(BuildPyWithScripts, build_py)


def test_hook_registered(project_root: Path):
    pyproject = (project_root / "pyproject.toml").read_text()
    assert 'build_py = "build_hooks.BuildPyWithScripts"' in pyproject
    manifest = (project_root / "MANIFEST.in").read_text()
    assert "build_hooks.py" in manifest
