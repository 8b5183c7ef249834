"""Tests for the worktree registry reader and mutators"""
from pathlib import Path

import pytest

from git_wk.exceptions import ExternalToolError, NotFoundError
from git_wk.models.worktree import WorktreeRecord
from git_wk.services.git.worktrees import WorktreeService, parse_worktree_list


PORCELAIN_OUTPUT = """worktree /home/dev/src/app
HEAD 1111111111111111111111111111111111111111
branch refs/heads/main

worktree /home/dev/src/app.worktrees/feature-x
HEAD 2222222222222222222222222222222222222222
branch refs/heads/feature-x

worktree /tmp/scratch
HEAD 3333333333333333333333333333333333333333
detached

"""


class TestParseWorktreeList:
    """Test porcelain parsing."""

    def test_parses_records_in_order(self):
        records = parse_worktree_list(PORCELAIN_OUTPUT)

        assert [r.path for r in records] == [
            "/home/dev/src/app",
            "/home/dev/src/app.worktrees/feature-x",
            "/tmp/scratch",
        ]
        assert records[0].commit == "1" * 40
        assert records[1].branch == "feature-x"

    def test_detached_sentinel(self):
        records = parse_worktree_list(PORCELAIN_OUTPUT)
        assert records[2].branch == "(detached)"
        assert records[2].is_detached is True

    def test_branch_without_heads_prefix_passes_through(self):
        output = "worktree /repo\nHEAD abc\nbranch refs/remotes/origin/odd\n"
        records = parse_worktree_list(output)
        assert records[0].branch == "refs/remotes/origin/odd"

    def test_last_record_without_trailing_blank_line(self):
        output = "worktree /a\nHEAD aaa\nbranch refs/heads/one\n\nworktree /b\nHEAD bbb\nbranch refs/heads/two"
        records = parse_worktree_list(output)
        assert len(records) == 2
        assert records[1] == WorktreeRecord(path="/b", commit="bbb", branch="two")

    def test_missing_fields_are_empty(self):
        records = parse_worktree_list("worktree /bare/repo\nbare\n\nworktree /other\n")
        assert records == [WorktreeRecord(path="/bare/repo"), WorktreeRecord(path="/other")]

    def test_unknown_lines_ignored(self):
        output = (
            "worktree /a\nHEAD aaa\nbranch refs/heads/one\nlocked reason here\n"
            "prunable gitdir file points to non-existent location\n"
        )
        records = parse_worktree_list(output)
        assert records == [WorktreeRecord(path="/a", commit="aaa", branch="one")]

    def test_lines_before_first_worktree_are_dropped(self):
        records = parse_worktree_list("HEAD zzz\n\nworktree /a\nHEAD aaa\n")
        assert records == [WorktreeRecord(path="/a", commit="aaa")]

    def test_empty_output(self):
        assert parse_worktree_list("") == []

    def test_short_commit(self):
        records = parse_worktree_list(PORCELAIN_OUTPUT)
        assert records[0].short_commit == "1111111"


class TestWorktreeServiceQueries:
    """Test registry queries against a mocked runner."""

    def test_list_worktrees_runs_porcelain(self, mock_runner):
        mock_runner.run.return_value = PORCELAIN_OUTPUT
        service = WorktreeService(mock_runner)

        records = service.list_worktrees()

        mock_runner.run.assert_called_once_with("worktree", "list", "--porcelain")
        assert len(records) == 3

    def test_list_worktrees_propagates_tool_error(self, mock_runner):
        mock_runner.run.side_effect = ExternalToolError(
            ["worktree", "list", "--porcelain"], 128, "fatal: not a git repository"
        )
        service = WorktreeService(mock_runner)

        with pytest.raises(ExternalToolError, match="not a git repository"):
            service.list_worktrees()

    def test_main_worktree_path(self, mock_runner):
        mock_runner.run.return_value = PORCELAIN_OUTPUT
        assert WorktreeService(mock_runner).main_worktree_path() == "/home/dev/src/app"

    def test_main_worktree_path_empty_registry(self, mock_runner):
        mock_runner.run.return_value = ""
        with pytest.raises(NotFoundError, match="no worktrees found"):
            WorktreeService(mock_runner).main_worktree_path()

    def test_find_by_branch(self, mock_runner):
        mock_runner.run.return_value = PORCELAIN_OUTPUT
        record = WorktreeService(mock_runner).find_by_branch("feature-x")
        assert record.path == "/home/dev/src/app.worktrees/feature-x"

    def test_find_by_branch_missing(self, mock_runner):
        mock_runner.run.return_value = PORCELAIN_OUTPUT
        with pytest.raises(NotFoundError, match="worktree for branch 'nope' not found"):
            WorktreeService(mock_runner).find_by_branch("nope")

    def test_find_by_branch_ignores_detached_placeholder(self, mock_runner):
        mock_runner.run.return_value = PORCELAIN_OUTPUT
        with pytest.raises(NotFoundError):
            WorktreeService(mock_runner).find_by_branch("(detached)")

    def test_find_by_path(self, mock_runner):
        mock_runner.run.return_value = PORCELAIN_OUTPUT
        record = WorktreeService(mock_runner).find_by_path("/tmp/scratch/")
        assert record.commit == "3" * 40

    def test_worktree_branches_skips_detached(self, mock_runner):
        mock_runner.run.return_value = PORCELAIN_OUTPUT
        assert WorktreeService(mock_runner).worktree_branches() == {"main", "feature-x"}


class TestWorktreeServiceMutations:
    """Test the git arguments used by add/remove/move."""

    def test_add_creates_branch_when_missing(self, mock_runner):
        mock_runner.succeeds.return_value = False
        service = WorktreeService(mock_runner)

        path = service.add_worktree("/wt/feature-x", "feature-x")

        assert path == "/wt/feature-x"
        mock_runner.run.assert_called_once_with(
            "worktree", "add", "-b", "feature-x", "/wt/feature-x", "HEAD"
        )

    def test_add_attaches_existing_branch(self, mock_runner):
        mock_runner.succeeds.return_value = True
        service = WorktreeService(mock_runner)

        service.add_worktree("/wt/feature-x", "feature-x")

        mock_runner.run.assert_called_once_with("worktree", "add", "/wt/feature-x", "feature-x")

    def test_branch_exists_checks_local_then_remote(self, mock_runner):
        mock_runner.succeeds.side_effect = [False, True]
        service = WorktreeService(mock_runner)

        assert service.branch_exists("feature-x") is True
        calls = [c.args for c in mock_runner.succeeds.call_args_list]
        assert calls == [
            ("show-ref", "--verify", "--quiet", "refs/heads/feature-x"),
            ("show-ref", "--verify", "--quiet", "refs/remotes/origin/feature-x"),
        ]

    def test_remove_with_force(self, mock_runner):
        WorktreeService(mock_runner).remove_worktree("/wt/x", force=True)
        mock_runner.run.assert_called_once_with("worktree", "remove", "--force", "/wt/x")

    def test_remove_without_force(self, mock_runner):
        WorktreeService(mock_runner).remove_worktree("/wt/x")
        mock_runner.run.assert_called_once_with("worktree", "remove", "/wt/x")

    def test_add_failure_surfaces_output(self, mock_runner):
        mock_runner.succeeds.return_value = True
        mock_runner.run.side_effect = ExternalToolError(
            ["worktree", "add"], 128, "fatal: 'main' is already checked out at '/repo'"
        )

        with pytest.raises(ExternalToolError) as exc_info:
            WorktreeService(mock_runner).add_worktree("/wt/main", "main")

        assert str(exc_info.value) == (
            "git worktree add failed: fatal: 'main' is already checked out at '/repo'"
        )


class TestWorktreeServiceRealRepo:
    """Test against a real repository."""

    def test_list_real_repo(self, git_repo):
        from git_wk.services.git.runner import GitRunner

        service = WorktreeService(GitRunner(git_repo.working_dir))
        records = service.list_worktrees()

        assert len(records) == 1
        assert records[0].path == str(Path(git_repo.working_dir))
        assert records[0].branch == "main"
        assert records[0].commit == git_repo.head.commit.hexsha


def test_record_str():
    record = WorktreeRecord(path="/wt/x", commit="abcdef0123", branch="x")
    assert str(record) == "x @ /wt/x [abcdef0]"
