"""
Tests for the command-line interface.
"""

import json

import pytest
import yaml

from lintratchet.cli import create_parser, main, ratchet_main

SUPPRESSED = "#[allow(dead_code)]\nfn a() {}\n"
CLEAN = "fn a() {}\n"


@pytest.fixture
def repo(tmp_path, clean_env):
    """An empty working tree as the current directory."""
    clean_env.chdir(tmp_path)
    return tmp_path


def read_baseline(repo):
    return yaml.safe_load((repo / ".therug.yaml").read_text(encoding="utf-8"))


class TestParser:
    """Tests for argument parsing."""

    def test_check_accepts_files(self):
        args = create_parser().parse_args(["check", "a.rs", "b.rs", "--no-color"])

        assert args.command == "check"
        assert args.files == ["a.rs", "b.rs"]
        assert args.no_color is True

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out


class TestCheckCommand:
    """Tests for the pre-commit check."""

    def test_new_suppression_is_rejected(self, repo, capsys):
        (repo / "lib.rs").write_text(SUPPRESSED, encoding="utf-8")

        code = main(["check", "lib.rs", "--no-color"])

        err = capsys.readouterr().err
        assert code == 1
        assert "Cannot suppress new lints in lib.rs: allow(dead_code)" in err
        assert "UPDATE_ANYWAY=1" in err
        assert not (repo / ".therug.yaml").exists()

    def test_override_writes_baseline(self, repo, capsys, monkeypatch):
        (repo / "lib.rs").write_text(SUPPRESSED, encoding="utf-8")
        monkeypatch.setenv("UPDATE_ANYWAY", "1")

        code = main(["check", "lib.rs", "--no-color"])

        assert code == 1
        assert read_baseline(repo) == {"lints": {"lib.rs": {"dead_code": 1}}}
        assert "recorded in .therug.yaml" in capsys.readouterr().err

    def test_improvement_asks_to_restage(self, repo, capsys):
        (repo / ".therug.yaml").write_text("lints:\n  lib.rs:\n    dead_code: 1\n", encoding="utf-8")
        (repo / "lib.rs").write_text(CLEAN, encoding="utf-8")

        code = main(["check", "lib.rs", "--no-color"])

        err = capsys.readouterr().err
        assert code == 2
        assert "allow(dead_code) fully resolved in lib.rs" in err
        assert "git add .therug.yaml" in err
        assert read_baseline(repo) == {"lints": {}}

    def test_rerun_after_improvement_passes(self, repo, capsys):
        (repo / ".therug.yaml").write_text("lints:\n  lib.rs:\n    dead_code: 2\n", encoding="utf-8")
        (repo / "lib.rs").write_text(SUPPRESSED, encoding="utf-8")

        assert main(["check", "lib.rs", "--no-color"]) == 2
        assert main(["check", "lib.rs", "--no-color"]) == 0
        assert read_baseline(repo) == {"lints": {"lib.rs": {"dead_code": 1}}}

    def test_unchanged_counts_are_silent(self, repo, capsys):
        (repo / "lib.rs").write_text(CLEAN, encoding="utf-8")

        assert main(["check", "lib.rs", "--no-color"]) == 0
        assert capsys.readouterr().err == ""

    def test_baseline_option(self, repo, capsys):
        (repo / "lib.rs").write_text(SUPPRESSED, encoding="utf-8")
        (repo / "rug.yaml").write_text("lints:\n  lib.rs:\n    dead_code: 1\n", encoding="utf-8")

        assert main(["check", "lib.rs", "--baseline", "rug.yaml"]) == 0

    def test_parse_error_exits_three(self, repo, capsys):
        (repo / "lib.rs").write_text("fn broken( {\n", encoding="utf-8")

        code = main(["check", "lib.rs", "--no-color"])

        err = capsys.readouterr().err
        assert code == 3
        assert "Error:" in err
        assert "lib.rs" in err
        assert not (repo / ".therug.yaml").exists()

    def test_unreadable_file_exits_three(self, repo, capsys):
        (repo / ".therug.yaml").write_text("lints:\n  lib.rs:\n    dead_code: 4\n", encoding="utf-8")
        (repo / "lib.rs").mkdir()

        code = main(["check", "lib.rs", "--no-color"])

        assert code == 3
        assert "Cannot read lib.rs" in capsys.readouterr().err
        assert read_baseline(repo) == {"lints": {"lib.rs": {"dead_code": 4}}}

    def test_malformed_baseline_exits_three(self, repo, capsys):
        (repo / ".therug.yaml").write_text("lints: 7\n", encoding="utf-8")
        (repo / "lib.rs").write_text(CLEAN, encoding="utf-8")

        assert main(["check", "lib.rs"]) == 3
        assert ".therug.yaml" in capsys.readouterr().err

    def test_json_output(self, repo, capsys):
        (repo / "lib.rs").write_text(SUPPRESSED, encoding="utf-8")

        code = main(["check", "lib.rs", "--format", "json"])

        data = json.loads(capsys.readouterr().out)
        assert code == 1
        assert data["relationship"] == "not_a_subset"
        assert data["regression"]["file"] == "lib.rs"
        assert data["regression"]["lint"] == "dead_code"
        assert data["persisted"] is False

    def test_warning_ratchet_entry_point(self, repo, capsys):
        (repo / "lib.rs").write_text(SUPPRESSED, encoding="utf-8")

        assert ratchet_main(["lib.rs", "--no-color"]) == 1


class TestCountCommand:
    """Tests for the count command."""

    def test_count_text(self, repo, capsys):
        (repo / "lib.rs").write_text(SUPPRESSED, encoding="utf-8")
        (repo / "clean.rs").write_text(CLEAN, encoding="utf-8")

        assert main(["count", "lib.rs", "clean.rs", "--no-color"]) == 0

        out = capsys.readouterr().out
        assert "dead_code" in out
        assert "(no suppressions)" in out
        assert "Total suppressions: 1" in out

    def test_count_json(self, repo, capsys):
        (repo / "lib.rs").write_text(SUPPRESSED, encoding="utf-8")

        assert main(["count", "lib.rs", "--format", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data == {"total": 1, "lints": {"lib.rs": {"dead_code": 1}}}


class TestInitCommand:
    """Tests for the init command."""

    def test_init_creates_config(self, repo, capsys):
        assert main(["init"]) == 0

        content = yaml.safe_load((repo / ".lintratchet.yaml").read_text(encoding="utf-8"))
        assert content["ratchet"]["override_env"] == "UPDATE_ANYWAY"

    def test_init_refuses_to_overwrite(self, repo, capsys):
        (repo / ".lintratchet.yaml").write_text("ratchet: {}\n", encoding="utf-8")

        assert main(["init"]) == 1
        assert main(["init", "--force"]) == 0
