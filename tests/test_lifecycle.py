"""Tests for WorktreeManager"""
from pathlib import Path
from unittest.mock import Mock, call

import pytest

from git_worktree_picker.config import Config
from git_worktree_picker.constants import (
    MSG_DELETE_FAILED,
    MSG_FORCE_OFF,
    MSG_FORCE_ON,
    MSG_NOT_DELETED,
    PROMPT_DELETE,
    PROMPT_FORCE_DELETE,
)
from git_worktree_picker.core import WorktreeManager
from git_worktree_picker.exceptions import (
    CommandError,
    CreateError,
    NotFoundError,
    ValidationError,
)
from git_worktree_picker.models.operation import Callbacks
from git_worktree_picker.ui.adapter import HeadlessFrontEnd
from git_worktree_picker.utils.paths import same_path


def make_manager(runner, registry, config=None, frontend=None):
    manager = WorktreeManager(
        runner.working_dir,
        config or Config(confirm_deletions=False, change_directory=False),
        frontend=frontend or HeadlessFrontEnd(),
        runner=runner,
    )
    manager.registry = registry
    return manager


def callbacks():
    return Callbacks(on_success=Mock(), on_failure=Mock())


def remove_failure():
    return CommandError(
        ["git", "worktree", "remove", "/repo/feat"],
        128,
        "fatal: '/repo/feat' contains modified or untracked files, use --force to delete it",
    )


class TestCreate:
    """Test worktree creation."""

    def test_empty_name_rejected_without_command(self, mock_runner, mock_registry):
        manager = make_manager(mock_runner, mock_registry)
        cbs = callbacks()

        result = manager.create("   ", "main", cbs)

        assert not result.success
        assert isinstance(result.error, ValidationError)
        cbs.on_failure.assert_called_once_with(result.error)
        cbs.on_success.assert_not_called()
        mock_runner.run.assert_not_called()
        mock_registry.ref_exists.assert_not_called()

    def test_empty_ref_rejected(self, mock_runner, mock_registry):
        manager = make_manager(mock_runner, mock_registry)
        result = manager.create("feat-wt", "")

        assert isinstance(result.error, ValidationError)
        mock_runner.run.assert_not_called()

    def test_existing_ref(self, mock_runner, mock_registry):
        manager = make_manager(mock_runner, mock_registry)
        cbs = callbacks()

        result = manager.create("../feat-wt", "feat", cbs)

        assert result.success
        assert result.value == "/repo/feat-wt"
        mock_runner.run.assert_called_once_with(["worktree", "add", "../feat-wt", "feat"])
        cbs.on_success.assert_called_once_with()
        cbs.on_failure.assert_not_called()

    def test_new_branch(self, mock_runner, mock_registry):
        mock_registry.ref_exists.return_value = False
        manager = make_manager(mock_runner, mock_registry)

        result = manager.create("/wt/new", "new-branch")

        assert result.success
        assert result.value == "/wt/new"
        mock_runner.run.assert_called_once_with(["worktree", "add", "-b", "new-branch", "/wt/new"])

    def test_command_failure(self, mock_runner, mock_registry):
        mock_runner.run.side_effect = CommandError(
            ["git", "worktree", "add"], 128, "fatal: '/wt/x' already exists"
        )
        manager = make_manager(mock_runner, mock_registry)
        cbs = callbacks()

        result = manager.create("/wt/x", "feat", cbs)

        assert isinstance(result.error, CreateError)
        assert "already exists" in result.error.stderr
        cbs.on_failure.assert_called_once_with(result.error)
        assert mock_runner.run.call_count == 1  # not retried


class TestSwitch:
    """Test switching the active worktree."""

    def test_switch_to_listed_worktree(self, mock_runner, mock_registry):
        manager = make_manager(mock_runner, mock_registry)
        cbs = callbacks()

        result = manager.switch("/repo/feat", cbs)

        assert result.success
        assert result.value == "/repo/feat"
        mock_runner.chdir.assert_called_once_with("/repo/feat")
        cbs.on_success.assert_called_once_with()

    def test_switch_to_unknown_path(self, mock_runner, mock_registry):
        manager = make_manager(mock_runner, mock_registry)
        cbs = callbacks()

        result = manager.switch("/nowhere", cbs)

        assert isinstance(result.error, NotFoundError)
        mock_runner.chdir.assert_not_called()
        cbs.on_failure.assert_called_once_with(result.error)

    def test_switch_to_bare_root(self, mock_runner, mock_registry):
        """The root is a valid target even though bare rows are not listed."""
        mock_registry.root_path.return_value = "/repo/.bare"
        manager = make_manager(mock_runner, mock_registry)

        result = manager.switch("/repo/.bare")

        assert result.success
        mock_runner.chdir.assert_called_once_with("/repo/.bare")

    def test_relative_path_from_active_worktree(self, mock_runner, mock_registry):
        manager = make_manager(mock_runner, mock_registry)

        result = manager.switch("../feat")

        assert result.success
        mock_registry.find_worktree.assert_called_once_with("/repo/feat")
        mock_runner.chdir.assert_called_once_with("/repo/feat")

    def test_switch_changes_process_directory(self, git_repo_with_worktrees, feature_path, monkeypatch):
        monkeypatch.chdir(git_repo_with_worktrees.working_dir)
        manager = WorktreeManager(
            git_repo_with_worktrees.working_dir, Config(change_directory=True)
        )

        result = manager.switch(feature_path)

        assert result.success
        assert same_path(str(Path.cwd()), feature_path)


class TestDelete:
    """Test deletion safety rules."""

    def test_delete_inactive(self, mock_runner, mock_registry):
        manager = make_manager(mock_runner, mock_registry)
        cbs = callbacks()

        result = manager.delete("/repo/feat", callbacks=cbs)

        assert result.success
        mock_runner.run.assert_called_once_with(["worktree", "remove", "/repo/feat"])
        mock_runner.chdir.assert_not_called()
        cbs.on_success.assert_called_once_with()

    def test_delete_active_redirects_to_root_first(self, mock_runner, mock_registry):
        mock_registry.current_path.return_value = "/repo/feat"
        manager = make_manager(mock_runner, mock_registry)

        result = manager.delete("/repo/feat")

        assert result.success
        assert mock_runner.mock_calls == [
            call.chdir("/repo/main"),
            call.run(["worktree", "remove", "/repo/feat"]),
        ]

    def test_delete_unknown_path(self, mock_runner, mock_registry):
        manager = make_manager(mock_runner, mock_registry)
        cbs = callbacks()

        result = manager.delete("/repo/gone", callbacks=cbs)

        assert isinstance(result.error, NotFoundError)
        cbs.on_failure.assert_called_once_with(result.error)
        mock_runner.run.assert_not_called()

    def test_relative_path_from_active_worktree(self, mock_runner, mock_registry):
        manager = make_manager(mock_runner, mock_registry)

        result = manager.delete("../feat")

        assert result.success
        mock_runner.run.assert_called_once_with(["worktree", "remove", "/repo/feat"])

    def test_forced_parameter(self, mock_runner, mock_registry):
        manager = make_manager(mock_runner, mock_registry)

        manager.delete("/repo/feat", forced=True)

        mock_runner.run.assert_called_once_with(["worktree", "remove", "/repo/feat", "--force"])
        assert manager.force_next_deletion is False

    def test_failure_arms_sticky_flag(self, mock_runner, mock_registry):
        frontend = HeadlessFrontEnd()
        mock_runner.run.side_effect = remove_failure()
        manager = make_manager(mock_runner, mock_registry, frontend=frontend)
        cbs = callbacks()

        result = manager.delete("/repo/feat", callbacks=cbs)

        assert not result.success
        assert isinstance(result.error, CommandError)
        assert manager.force_next_deletion is True
        cbs.on_failure.assert_called_once_with(result.error)
        cbs.on_success.assert_not_called()
        assert ("error", MSG_DELETE_FAILED) in frontend.messages
        assert mock_runner.run.call_count == 1  # not retried

    def test_next_deletion_is_forced_then_flag_clears(self, mock_runner, mock_registry):
        mock_runner.run.side_effect = [remove_failure(), None, None]
        manager = make_manager(mock_runner, mock_registry)

        manager.delete("/repo/feat")
        second = manager.delete("/repo/feat")

        assert second.success
        assert mock_runner.run.call_args == call(["worktree", "remove", "/repo/feat", "--force"])
        assert manager.force_next_deletion is False

        manager.delete("/repo/feat")
        assert mock_runner.run.call_args == call(["worktree", "remove", "/repo/feat"])

    def test_toggle_flips_unconditionally(self, mock_runner, mock_registry):
        frontend = HeadlessFrontEnd()
        manager = make_manager(mock_runner, mock_registry, frontend=frontend)

        assert manager.toggle_force_next_deletion() is True
        assert manager.toggle_force_next_deletion() is False
        assert manager.toggle_force_next_deletion() is True
        assert [m for _, m in frontend.messages] == [MSG_FORCE_ON, MSG_FORCE_OFF, MSG_FORCE_ON]

    def test_toggled_flag_forces_deletion(self, mock_runner, mock_registry):
        manager = make_manager(mock_runner, mock_registry)
        manager.toggle_force_next_deletion()

        manager.delete("/repo/feat")

        mock_runner.run.assert_called_once_with(["worktree", "remove", "/repo/feat", "--force"])
        assert manager.force_next_deletion is False


class TestConfirmation:
    """Test the confirmation policy."""

    @pytest.fixture
    def frontend(self):
        frontend = Mock()
        frontend.confirm.return_value = "Yes"
        return frontend

    @pytest.fixture
    def manager(self, mock_runner, mock_registry, frontend):
        return make_manager(
            mock_runner, mock_registry, config=Config(change_directory=False), frontend=frontend
        )

    def test_declined_has_no_side_effects(self, manager, frontend, mock_runner):
        frontend.confirm.return_value = "nope"
        cbs = callbacks()

        result = manager.delete("/repo/feat", callbacks=cbs)

        assert result.cancelled
        assert not result.success
        mock_runner.run.assert_not_called()
        mock_runner.chdir.assert_not_called()
        cbs.on_success.assert_not_called()
        cbs.on_failure.assert_not_called()
        frontend.notify.assert_called_once_with(MSG_NOT_DELETED)

    def test_accepted(self, manager, frontend, mock_runner):
        result = manager.delete("/repo/feat")

        assert result.success
        frontend.confirm.assert_called_once_with(PROMPT_DELETE)
        mock_runner.run.assert_called_once()

    def test_prompt_mentions_forcing(self, manager, frontend):
        manager.toggle_force_next_deletion()
        manager.delete("/repo/feat")
        frontend.confirm.assert_called_once_with(PROMPT_FORCE_DELETE)

    def test_already_confirmed(self, manager, frontend, mock_runner):
        result = manager.delete("/repo/feat", confirmed=True)

        assert result.success
        frontend.confirm.assert_not_called()

    def test_empty_answer_is_no(self, manager, frontend, mock_runner):
        frontend.confirm.return_value = ""
        assert manager.delete("/repo/feat").cancelled
        mock_runner.run.assert_not_called()


class TestLifecycleWithRepository:
    """End-to-end lifecycle against a real repository."""

    @pytest.fixture
    def manager(self, git_repo_with_worktrees, mock_config):
        return WorktreeManager(git_repo_with_worktrees.working_dir, mock_config)

    def test_create_then_list(self, manager, git_repo_with_worktrees, temp_dir):
        target = str(temp_dir / "old-wt")
        result = manager.create(target, "old")

        assert result.success
        paths = [wt.path for wt in manager.list()]
        assert any(same_path(p, target) for p in paths)
        # Creation does not change the active worktree
        assert same_path(manager.current_worktree_path, git_repo_with_worktrees.working_dir)

    def test_create_new_branch(self, manager, temp_dir):
        target = str(temp_dir / "brand-new")
        result = manager.create(target, "brand-new")

        assert result.success
        assert "brand-new" in [wt.branch for wt in manager.list()]

    def test_create_failure_surfaces_stderr(self, manager, feature_path):
        result = manager.create(feature_path, "old")

        assert isinstance(result.error, CreateError)
        assert result.error.stderr

    def test_delete_inactive(self, manager, feature_path):
        result = manager.delete(feature_path)

        assert result.success
        assert all(not same_path(wt.path, feature_path) for wt in manager.list())

    def test_delete_active_redirects(self, manager, git_repo_with_worktrees, feature_path):
        manager.switch(feature_path)
        assert same_path(manager.current_worktree_path, feature_path)

        result = manager.delete(feature_path)

        assert result.success
        assert same_path(manager.current_worktree_path, git_repo_with_worktrees.working_dir)
        assert all(not same_path(wt.path, feature_path) for wt in manager.list())

    def test_dirty_worktree_needs_force(self, manager, feature_path):
        (Path(feature_path) / "README.md").write_text("changed\n")

        first = manager.delete(feature_path)
        assert not first.success
        assert manager.force_next_deletion is True
        assert any(same_path(wt.path, feature_path) for wt in manager.list())

        second = manager.delete(feature_path)
        assert second.success
        assert manager.force_next_deletion is False
        assert all(not same_path(wt.path, feature_path) for wt in manager.list())
