"""Configuration handling for git-worktree-picker"""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Union

from git_worktree_picker.constants import CONFIG_DIR_NAME, REPO_CONFIG_FILE, USER_CONFIG_FILE
from git_worktree_picker.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class Config:
    """Configuration for git-worktree-picker with validation."""

    # Deletion safety
    confirm_deletions: bool = True  # Ask before removing a worktree

    # Git integration
    use_porcelain: bool = True  # Prefer machine-readable listings over the line grammar
    git_executable: str = "git"

    # Switching
    change_directory: bool = True  # os.chdir into the worktree on switch

    # Execution modes
    interactive: bool = True
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_git_executable()
        self._validate_flags()

    def _validate_git_executable(self):
        """Validate git_executable is not empty."""
        if not self.git_executable or not self.git_executable.strip():
            raise ValueError("git_executable cannot be empty")
        self.git_executable = self.git_executable.strip()

    def _validate_flags(self):
        """Validate boolean options are really booleans (JSON files may hold anything)."""
        for name in (
            "confirm_deletions",
            "use_porcelain",
            "change_directory",
            "interactive",
            "verbose",
            "debug",
        ):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be a boolean, got {value!r}")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in fields(cls)}
        unknown = set(config_dict) - known_fields
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)


def read_config_file(path: Union[str, Path]) -> dict:
    """Read one JSON config file.

    Returns:
        The file's settings, or an empty dict if the file does not exist.

    Raises:
        ValueError: If the file is not a JSON object.
    """
    path = Path(path)
    if not path.is_file():
        return {}

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")

    logger.debug(f"Loaded config from {path}")
    return data


def load_config(
    repo_path: Optional[Union[str, Path]] = None,
    overrides: Optional[dict] = None,
    home: Optional[Path] = None,
) -> Config:
    """Build a Config from the user file, the repository file and explicit overrides.

    Later sources win: ~/.git-worktree-picker/config.json, then
    <repo>/.git-worktree-picker.json, then ``overrides``.
    """
    home = home or Path.home()
    settings = read_config_file(home / CONFIG_DIR_NAME / USER_CONFIG_FILE)
    if repo_path is not None:
        settings.update(read_config_file(Path(repo_path) / REPO_CONFIG_FILE))
    if overrides:
        settings.update({k: v for k, v in overrides.items() if v is not None})
    return Config.from_dict(settings)
