"""Tests for the sourcegen CLI."""

import argparse
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from sourcegen.cli import build_parser, main
from sourcegen.config import load_config

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def project(isolated_env):
    src = isolated_env / "src"
    src.mkdir()
    (src / "sample.rs").write_text((FIXTURES / "sample.rs").read_text())
    (src / "readme.md").write_text("// Feature: Not Rust\n")
    return isolated_env


class TestParser:
    def test_build_parser_returns_parser(self):
        assert isinstance(build_parser(), argparse.ArgumentParser)

    def test_no_args_shows_help(self, capsys):
        assert main([]) == 0
        assert "sourcegen" in capsys.readouterr().out

    @pytest.mark.parametrize("cmd", [["--help"], ["files", "--help"], ["blocks", "--help"], ["check", "--help"]])
    def test_help(self, cmd):
        with pytest.raises(SystemExit) as info:
            main(cmd)
        assert info.value.code == 0

    def test_ext_and_all_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["files", "x", "--ext", ".rs", "--all"])


class TestFiles:
    def test_lists_source_files(self, project, capsys):
        assert main(["files", str(project / "src")]) == 0
        out = capsys.readouterr().out.split()
        assert [Path(p).name for p in out] == ["sample.rs"]

    def test_all(self, project, capsys):
        assert main(["files", str(project / "src"), "--all"]) == 0
        names = sorted(Path(p).name for p in capsys.readouterr().out.split())
        assert names == ["readme.md", "sample.rs"]

    def test_missing_dir_is_an_error(self, project, capsys):
        assert main(["files", str(project / "nope")]) == 1
        assert "ERROR:" in capsys.readouterr().err

    def test_malformed_config_is_an_error(self, project, capsys):
        (project / "sourcegen.yaml").write_text("a: [unclosed\n")
        assert main(["files", str(project / "src")]) == 1
        assert "ERROR:" in capsys.readouterr().err


class TestBlocks:
    def test_tagged_links(self, project, capsys):
        assert main(["blocks", str(project / "src"), "--tag", "Feature"]) == 0
        out = capsys.readouterr().out
        assert "/src/sample.rs#L3[sample.rs]" in out
        assert "Join Lines: " in out
        assert "2 block(s)" in out

    def test_json(self, project, capsys):
        assert main(["blocks", str(project / "src"), "--tag", "Assist", "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload == [{
            "file": str((project / "src" / "sample.rs").resolve()),
            "line": 12,
            "id": "flip_comma",
            "contents": ["Flips two comma-separated items."],
        }]

    def test_root_flag(self, project, tmp_path_factory, capsys, monkeypatch):
        monkeypatch.setenv("SOURCEGEN_PROJECT_ROOT", str(tmp_path_factory.mktemp("other")))
        rc = main(["--root", str(project), "blocks", str(project / "src"), "--tag", "Assist"])
        assert rc == 0
        assert "/src/sample.rs#L12[sample.rs]" in capsys.readouterr().out

    def test_lowercase_tag(self, project, capsys):
        assert main(["blocks", str(project / "src"), "--tag", "feature"]) == 1
        assert "uppercase" in capsys.readouterr().err

    def test_lowercase_tag_with_no_files(self, project, capsys):
        empty = project / "empty"
        empty.mkdir()
        assert main(["blocks", str(empty), "--tag", "feature"]) == 1
        assert "uppercase" in capsys.readouterr().err

    def test_config_loaded_once(self, project, capsys):
        (project / "sourcegen.yaml").write_text("base_url: https://example.org/x\n")
        with patch("sourcegen.location.load_config", side_effect=AssertionError("reloaded")), \
                patch("sourcegen.cli.blocks.load_config", wraps=load_config) as loader:
            assert main(["blocks", str(project / "src"), "--tag", "Feature"]) == 0
        assert loader.call_count == 1
        assert "https://example.org/x/src/sample.rs#L3[sample.rs]" in capsys.readouterr().out


class TestGenerated:
    def test_check_drift_then_clean(self, project, capsys):
        target = project / "gen.rs"
        expected = project / "expected.rs"
        expected.write_text("fn f() {}\n")

        assert main(["check", str(target), str(expected)]) == 1
        assert "DRIFT:" in capsys.readouterr().out
        assert target.read_text() == "fn f() {}\n"

        assert main(["check", str(target), str(expected)]) == 0
        assert "up to date" in capsys.readouterr().out

    def test_reformat(self, project, capsys):
        source = project / "in.rs"
        source.write_text("fn f(){}")
        with patch("sourcegen.cli.generated.reformat", return_value="fn f() {}\n") as fmt:
            assert main(["reformat", str(source)]) == 0
        fmt.assert_called_once_with("fn f(){}")
        assert capsys.readouterr().out == "fn f() {}\n"
