"""Pytest fixtures for git-wk tests"""
import io
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest
import git
from rich.console import Console

from git_wk.services.git.runner import GitRunner


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # git reports resolved paths, so compare against the resolved form
        yield Path(tmpdir).resolve()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    try:
        repo.git.branch('-M', 'main')
    except Exception:
        pass

    # The remote name differs from the directory name on purpose
    repo.create_remote('origin', 'git@github.com:test/test-repo.git')

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Repository with local branches and fake remote-tracking refs.

    Local: main, feature/test-feature, local-only
    Remote (origin): main, feature/test-feature, remote-only, HEAD -> main
    """
    repo = git_repo
    repo_path = Path(repo.working_dir)

    repo.git.checkout('-b', 'feature/test-feature')
    feature_file = repo_path / "feature.txt"
    feature_file.write_text("Feature content\n")
    repo.index.add(["feature.txt"])
    repo.index.commit("Add feature")

    repo.git.checkout('main')
    repo.git.branch('local-only')

    head = repo.head.commit.hexsha
    repo.git.update_ref('refs/remotes/origin/main', head)
    repo.git.update_ref('refs/remotes/origin/feature/test-feature', 'feature/test-feature')
    repo.git.update_ref('refs/remotes/origin/remote-only', head)
    repo.git.symbolic_ref('refs/remotes/origin/HEAD', 'refs/remotes/origin/main')

    yield repo


@pytest.fixture
def worktrees_dir(temp_dir):
    """Standard worktrees directory for git_repo (named after the origin URL)."""
    return temp_dir / "test-repo.worktrees"


@pytest.fixture
def mock_runner():
    """Create a mock GitRunner."""
    return Mock(spec=GitRunner)


@pytest.fixture
def output():
    """Buffer that a test console writes into."""
    return io.StringIO()


@pytest.fixture
def console(output):
    """Rich console writing plain text into the output buffer."""
    return Console(file=output, force_terminal=False, color_system=None, width=200)
