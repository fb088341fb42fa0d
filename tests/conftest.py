"""Pytest fixtures for git-worktree-picker tests"""
import tempfile
from pathlib import Path
from unittest.mock import Mock

import git
import pytest

from git_worktree_picker.config import Config
from git_worktree_picker.models.worktree import WorktreeEntry
from git_worktree_picker.services.git.registry import WorktreeRegistry
from git_worktree_picker.services.git.runner import CommandRunner


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def mock_config():
    """Create a mock configuration dictionary."""
    return {
        'verbose': False,
        'debug': False,
        'confirm_deletions': False,
        'use_porcelain': True,
        'change_directory': False,
        'interactive': False,
    }


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
    repo.git.branch('-M', 'main')

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_worktrees(git_repo, temp_dir):
    """Repository with a 'feature' worktree and an unchecked-out 'old' branch."""
    repo = git_repo
    repo.git.branch('feature')
    repo.git.branch('old')

    worktree_path = temp_dir / "feature-wt"
    repo.git.worktree('add', str(worktree_path), 'feature')

    yield repo


@pytest.fixture
def feature_path(temp_dir):
    """Path of the worktree created by git_repo_with_worktrees."""
    return str(temp_dir / "feature-wt")


@pytest.fixture
def mock_runner():
    """Create a mock command runner."""
    runner = Mock(spec=CommandRunner)
    runner.working_dir = "/repo/main"
    runner.run.return_value = []
    return runner


@pytest.fixture
def worktree_entries():
    """Listing used by the mocked registry."""
    return {
        "/repo/main": WorktreeEntry(path="/repo/main", commit_sha="abc1234", branch="main", is_main=True),
        "/repo/feat": WorktreeEntry(path="/repo/feat", commit_sha="def5678", branch="feat"),
    }


@pytest.fixture
def mock_registry(worktree_entries):
    """Create a mock registry over worktree_entries, active worktree /repo/main."""
    registry = Mock(spec=WorktreeRegistry)
    registry.find_worktree.side_effect = lambda path: worktree_entries.get(path)
    registry.list_worktrees.return_value = list(worktree_entries.values())
    registry.current_path.return_value = "/repo/main"
    registry.root_path.return_value = "/repo/main"
    registry.ref_exists.return_value = True
    return registry


@pytest.fixture
def quiet_config():
    """Config that neither prompts nor changes the process directory."""
    return Config(confirm_deletions=False, change_directory=False, interactive=False)
