"""Tests for the wk command-line interface"""
from pathlib import Path

import pytest
from rich.console import Console

from git_wk.cli import build_command_table, build_parser, main, parse_args


@pytest.fixture
def commands():
    return build_command_table()


@pytest.fixture
def in_repo(git_repo, monkeypatch):
    monkeypatch.chdir(git_repo.working_dir)
    return Path(git_repo.working_dir)


class TestCommandTable:
    """Test the command table and parser built from it."""

    def test_all_commands_present(self, commands):
        assert set(commands) == {
            "new", "list", "remove", "switch", "organize", "branches", "setup", "init", "version",
        }

    def test_repo_requirements(self, commands):
        assert commands["version"].needs_repo is False
        assert commands["init"].checks_config is False
        assert commands["new"].needs_repo and commands["new"].checks_config

    def test_aliases_resolve_to_canonical_name(self, commands):
        parser = build_parser(commands)
        assert parser.parse_args(["ls"]).command_name == "list"

        args = parser.parse_args(["rm", "-f", "feature-x"])
        assert args.command_name == "remove"
        assert args.force is True
        assert args.branch == "feature-x"

    def test_optional_positionals(self, commands):
        parser = build_parser(commands)
        assert parser.parse_args(["new"]).branch is None
        assert parser.parse_args(["new", "x", "--no-switch"]).no_switch is True
        assert parser.parse_args(["setup", "-q"]).quiet is True
        assert parser.parse_args(["organize", "-y"]).yes is True

    def test_parse_args(self, commands):
        args = parse_args(commands, ["switch", "-y", "feature-x"])
        assert args.command_name == "switch"
        assert args.yes is True

    def test_global_flags(self, commands):
        args = build_parser(commands).parse_args(["--debug", "-v", "list"])
        assert args.debug and args.verbose


class TestMain:
    """Test dispatch and exit codes."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: wk" in capsys.readouterr().out

    def test_version(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main(["version"]) == 0

    def test_list_in_repository(self, in_repo):
        assert main(["list"]) == 0

    def test_outside_repository(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main(["list"]) == 1

    def test_remove_missing_worktree(self, in_repo):
        assert main(["remove", "does-not-exist"]) == 1

    def test_new_without_switch(self, in_repo, worktrees_dir):
        assert main(["new", "feature-x", "--no-switch"]) == 0
        assert (worktrees_dir / "feature-x").is_dir()

    def test_invalid_config_blocks_command(self, in_repo, worktrees_dir):
        (in_repo / ".wk.yaml").write_text("copy: [unclosed\n")
        assert main(["new", "feature-x", "--no-switch"]) == 1
        assert not (worktrees_dir / "feature-x").exists()

    def test_init_skips_config_check(self, in_repo, monkeypatch):
        (in_repo / ".wk.yaml").write_text("copy: [unclosed\n")
        monkeypatch.setattr(Console, "input", lambda self, *args, **kwargs: "n")
        assert main(["init"]) == 0

    def test_selection_cancelled_exits_cleanly(self, in_repo, monkeypatch):
        from git_wk.exceptions import SelectionCancelled

        def cancel(*args, **kwargs):
            raise SelectionCancelled()

        monkeypatch.setattr("git_wk.core.selector.select_worktree", cancel)
        assert main(["switch"]) == 0
