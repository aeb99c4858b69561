"""
Shared test fixtures.
"""

from pathlib import Path

import pytest


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def script_tree(tmp_path: Path) -> Path:
    """A small script source tree with one include and a few non-scripts."""
    root = tmp_path / "tabs"
    (root / "lib").mkdir(parents=True)
    (root / "apps").mkdir()
    (root / "system" / "arch").mkdir(parents=True)

    (root / "lib" / "common.sh").write_text("X=1")
    (root / "apps" / "hello.sh").write_text(
        "#!/bin/sh -e\n"
        "source ../lib/common.sh\n"
        "echo hello $X\n"
    )
    (root / "apps" / "noext").write_text("#!/bin/sh\necho no extension\n")
    (root / "apps" / "notes.txt").write_text("#!/bin/sh\necho wrong extension\n")
    (root / "apps" / "plain.sh").write_text("echo no shebang\n")
    (root / "system" / "arch" / "paru.sh").write_text("#!/bin/sh\n. ../../lib/common.sh\necho $X\n")
    return root


@pytest.fixture
def write_os_release(tmp_path: Path):
    """Write an os-release style file and return its path."""

    def _write(content: str) -> str:
        path = tmp_path / "os-release"
        path.write_text(content)
        return str(path)

    return _write
