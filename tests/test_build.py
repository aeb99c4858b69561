"""
Tests for the script build step — discovery, transclusion, outputs.
"""

import os
from pathlib import Path

import pytest

from linutil.build import (
    DEPS_FILE,
    build_scripts,
    get_script_list,
    has_shell_ext,
    main,
    needs_rebuild,
    read_deps,
    read_script,
    split_lines,
    transclude,
)
from linutil.errors import BuildError


def _outputs(root: Path) -> dict:
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file() and p.name != DEPS_FILE
    }


class TestDiscovery:
    def test_extension_rule(self):
        assert has_shell_ext("a/b/setup.sh")
        assert has_shell_ext("a/b/setup")
        assert has_shell_ext(".bashrc")
        assert not has_shell_ext("notes.txt")
        assert not has_shell_ext("setup.bash")

    def test_candidates(self, script_tree: Path):
        found = [os.path.relpath(p, script_tree) for p in get_script_list(str(script_tree))]
        assert found == [
            os.path.join("apps", "hello.sh"),
            os.path.join("apps", "noext"),
            os.path.join("system", "arch", "paru.sh"),
        ]

    def test_missing_directory_is_fatal(self, tmp_path: Path):
        with pytest.raises(BuildError):
            get_script_list(str(tmp_path / "nope"))


class TestTransclusion:
    def test_source_line_replaced(self, script_tree: Path):
        script = read_script(str(script_tree / "apps" / "hello.sh"), str(script_tree))
        out = transclude(script, str(script_tree))
        assert out.split("\n") == ["#!/bin/sh -e", "X=1", "echo hello $X"]

    def test_dot_include(self, script_tree: Path):
        script = read_script(str(script_tree / "system" / "arch" / "paru.sh"), str(script_tree))
        assert transclude(script, str(script_tree)) == "#!/bin/sh\nX=1\necho $X"

    def test_single_level_only(self, tmp_path: Path):
        (tmp_path / "inner.sh").write_text("INNER=1")
        (tmp_path / "outer.sh").write_text(". inner.sh")
        (tmp_path / "main.sh").write_text("#!/bin/sh\nsource outer.sh\n")
        script = read_script(str(tmp_path / "main.sh"), str(tmp_path))
        assert transclude(script, str(tmp_path)) == "#!/bin/sh\n. inner.sh"

    def test_directive_must_start_line(self, tmp_path: Path):
        (tmp_path / "main.sh").write_text("#!/bin/sh\n  . lib.sh\nsourced=1\n.hidden\n")
        script = read_script(str(tmp_path / "main.sh"), str(tmp_path))
        assert transclude(script, str(tmp_path)) == "#!/bin/sh\n  . lib.sh\nsourced=1\n.hidden"

    def test_missing_include_is_fatal(self, tmp_path: Path):
        (tmp_path / "main.sh").write_text("#!/bin/sh\n. missing.sh\n")
        script = read_script(str(tmp_path / "main.sh"), str(tmp_path))
        with pytest.raises(BuildError):
            transclude(script, str(tmp_path))

    def test_non_utf8_include_is_fatal(self, tmp_path: Path):
        (tmp_path / "lib.sh").write_bytes(b"X=\xff\xfe\n")
        (tmp_path / "main.sh").write_text("#!/bin/sh\n. lib.sh\n")
        script = read_script(str(tmp_path / "main.sh"), str(tmp_path))
        with pytest.raises(BuildError, match="lib.sh"):
            transclude(script, str(tmp_path))

    def test_non_utf8_script_fails_cli(self, tmp_path: Path, capsys):
        src = tmp_path / "src" / "apps"
        src.mkdir(parents=True)
        (src / "bad.sh").write_bytes(b"#!/bin/sh\necho \xff\n")
        rc = main([str(tmp_path / "src"), str(tmp_path / "out"), "--log-level", "ERROR"])
        assert rc == 1
        assert "bad.sh" in capsys.readouterr().err

    def test_split_lines(self):
        assert split_lines("") == []
        assert split_lines("a\r\nb\n") == ["a", "b"]
        assert split_lines("a\n\nb") == ["a", "", "b"]


class TestBuildScripts:
    def test_mirrored_tree(self, script_tree: Path, tmp_path: Path):
        out = tmp_path / "out"
        build_scripts(str(script_tree), str(out))
        files = _outputs(out)
        assert sorted(files) == ["apps/hello.sh", "apps/noext", "system/arch/paru.sh"]
        for data in files.values():
            assert data[:2] == b"#!"
        assert b"source" not in files["apps/hello.sh"]

    def test_deterministic(self, script_tree: Path, tmp_path: Path):
        build_scripts(str(script_tree), str(tmp_path / "a"))
        build_scripts(str(script_tree), str(tmp_path / "b"))
        assert _outputs(tmp_path / "a") == _outputs(tmp_path / "b")

    def test_overwrites_existing(self, script_tree: Path, tmp_path: Path):
        out = tmp_path / "out"
        (out / "apps").mkdir(parents=True)
        (out / "apps" / "hello.sh").write_text("stale")
        build_scripts(str(script_tree), str(out))
        assert (out / "apps" / "hello.sh").read_text().startswith("#!/bin/sh -e")

    def test_rerun_dependencies(self, script_tree: Path, tmp_path: Path):
        out = tmp_path / "out"
        deps = build_scripts(str(script_tree), str(out))
        assert deps[0].endswith("build.py")
        assert str((script_tree / "apps" / "hello.sh").resolve()) in [os.path.realpath(d) for d in deps]
        assert read_deps(str(out)) == deps

    def test_needs_rebuild(self, script_tree: Path, tmp_path: Path):
        out = tmp_path / "out"
        assert needs_rebuild(str(out))
        build_scripts(str(script_tree), str(out))
        manifest = out / DEPS_FILE
        future = os.path.getmtime(manifest) + 1000
        os.utime(manifest, (future, future))
        assert not needs_rebuild(str(out))
        target = script_tree / "apps" / "hello.sh"
        os.utime(target, (future + 10, future + 10))
        assert needs_rebuild(str(out))

    def test_cli_reports_failure(self, tmp_path: Path, capsys):
        rc = main([str(tmp_path / "missing"), str(tmp_path / "out"), "--log-level", "ERROR"])
        assert rc == 1
        assert "linutil-build:" in capsys.readouterr().err

    def test_bundled_scripts_build(self, project_root: Path, tmp_path: Path):
        out = tmp_path / "out"
        build_scripts(str(project_root / "tabs"), str(out))
        files = _outputs(out)
        assert "applications-setup/alacritty-setup.sh" in files
        assert "README.md" not in files
        body = files["applications-setup/alacritty-setup.sh"].decode()
        assert "command_exists()" in body
        assert "\n. " not in body
        assert body.rstrip().endswith("}")
        assert "revert() {" in body
