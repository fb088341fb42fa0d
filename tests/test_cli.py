"""Tests for the command-line entry point"""
import pytest

from git_worktree_picker.cli.args import parse_args
from git_worktree_picker.cli.main import main
from git_worktree_picker.utils.paths import same_path


@pytest.fixture(autouse=True)
def isolated_home(temp_dir, monkeypatch):
    """Keep the user's config file out of CLI tests."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))


def run_cli(repo, *args):
    return main(["-C", repo.working_dir, "--no-interactive", *args])


class TestArgs:
    """Test argument parsing."""

    def test_defaults(self):
        args = parse_args([])
        assert args.command is None
        assert args.yes is False

    def test_delete_force(self):
        args = parse_args(["delete", "/repo/feat", "--force"])
        assert args.command == "delete"
        assert args.path == "/repo/feat"
        assert args.force is True

    def test_branch_categories_exclusive(self):
        with pytest.raises(SystemExit):
            parse_args(["branches", "--worktrees", "--plain"])


class TestCommands:
    """Test subcommands against a real repository."""

    def test_list(self, git_repo_with_worktrees, capsys):
        assert run_cli(git_repo_with_worktrees, "list") == 0
        out = capsys.readouterr().out
        assert "main" in out
        assert "feature" in out

    def test_default_command_lists_without_terminal(self, git_repo_with_worktrees, capsys):
        assert run_cli(git_repo_with_worktrees) == 0
        assert "feature" in capsys.readouterr().out

    def test_branches_plain(self, git_repo_with_worktrees, capsys):
        assert run_cli(git_repo_with_worktrees, "branches", "--plain") == 0
        out = capsys.readouterr().out
        assert "old" in out
        assert "feature" not in out

    def test_switch_prints_path(self, git_repo_with_worktrees, feature_path, capsys):
        assert run_cli(git_repo_with_worktrees, "switch", feature_path) == 0
        assert same_path(capsys.readouterr().out.strip(), feature_path)

    def test_switch_relative_to_repository(
        self, git_repo_with_worktrees, feature_path, tmp_path, monkeypatch, capsys
    ):
        """Relative paths are taken from the -C directory, not the cwd."""
        monkeypatch.chdir(tmp_path)

        assert run_cli(git_repo_with_worktrees, "switch", "../feature-wt") == 0
        assert same_path(capsys.readouterr().out.strip(), feature_path)

    def test_delete_relative_to_repository(self, git_repo_with_worktrees, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)

        assert run_cli(git_repo_with_worktrees, "--yes", "delete", "../feature-wt") == 0

        run_cli(git_repo_with_worktrees, "list")
        assert "feature-wt" not in capsys.readouterr().out

    def test_switch_unknown(self, git_repo_with_worktrees, capsys):
        assert run_cli(git_repo_with_worktrees, "switch", "/no/such/worktree") == 1
        assert capsys.readouterr().out == ""

    def test_switch_needs_path_without_terminal(self, git_repo_with_worktrees):
        assert run_cli(git_repo_with_worktrees, "switch") == 2

    def test_create_and_delete(self, git_repo_with_worktrees, temp_dir, capsys):
        target = str(temp_dir / "old-wt")

        assert run_cli(git_repo_with_worktrees, "create", "old", target) == 0
        assert run_cli(git_repo_with_worktrees, "--yes", "delete", target) == 0

        run_cli(git_repo_with_worktrees, "list")
        assert "old-wt" not in capsys.readouterr().out

    def test_delete_without_yes_refused(self, git_repo_with_worktrees, feature_path, capsys):
        """Without a terminal to confirm on, deletion requires --yes."""
        assert run_cli(git_repo_with_worktrees, "delete", feature_path) == 2
        assert "--yes" in capsys.readouterr().err

        run_cli(git_repo_with_worktrees, "list")
        assert "feature" in capsys.readouterr().out

    def test_not_a_repository(self, temp_dir, capsys):
        assert main(["-C", str(temp_dir), "--no-interactive", "list"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_pick_needs_terminal(self, git_repo_with_worktrees):
        assert run_cli(git_repo_with_worktrees, "pick") == 2
