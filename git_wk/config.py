"""Configuration handling for git-wk"""

import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import yaml

from git_wk.constants import CONFIG_FILE_NAME
from git_wk.exceptions import ConfigError
from git_wk.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class Config:
    """Project configuration read from .wk.yaml."""

    # Files and directories copied from the source worktree
    copy: List[str] = field(default_factory=list)
    # Shell commands run inside the new worktree
    post_hooks: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.copy = self._validate_string_list("copy", self.copy)
        self.post_hooks = self._validate_string_list("post_hooks", self.post_hooks)

    @staticmethod
    def _validate_string_list(key: str, value) -> List[str]:
        """Validate that a config entry is a list of non-empty strings."""
        if value is None:
            return []
        if not isinstance(value, list):
            raise ConfigError(f"'{key}' must be a list, got {type(value).__name__}")
        for item in value:
            if not isinstance(item, str) or not item.strip():
                raise ConfigError(f"'{key}' entries must be non-empty strings, got {item!r}")
        return [item.strip() for item in value]

    @property
    def is_empty(self) -> bool:
        return not self.copy and not self.post_hooks

    def to_dict(self) -> dict:
        """Convert config to a dictionary suitable for YAML output."""
        data = {}
        if self.copy:
            data["copy"] = list(self.copy)
        if self.post_hooks:
            data["post_hooks"] = list(self.post_hooks)
        return data

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {"copy", "post_hooks"}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)


@dataclass
class RuntimeOptions:
    """Options for a single wk invocation, built from command-line flags."""

    verbose: bool = False
    debug: bool = False
    quiet: bool = False
    assume_yes: bool = False


def find_config(start_dir: str) -> Optional[str]:
    """Search for .wk.yaml from start_dir up to the filesystem root.

    Returns:
        Path to the config file, or None if there is none
    """
    directory = os.path.abspath(start_dir)
    while True:
        candidate = os.path.join(directory, CONFIG_FILE_NAME)
        if os.path.isfile(candidate):
            logger.debug(f"Found config at {candidate}")
            return candidate

        parent = os.path.dirname(directory)
        if parent == directory:
            return None
        directory = parent


def load_config(path: str) -> Config:
    """Read and parse a .wk.yaml file.

    Raises:
        ConfigError: if the file is not valid YAML or has the wrong shape
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid {CONFIG_FILE_NAME}: {e}") from e
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError(f"invalid {CONFIG_FILE_NAME}: expected a mapping at the top level")

    return Config.from_dict(data)


def write_config(path: str, config: Config) -> str:
    """Write config to path as YAML and return the written text."""
    text = yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False)
    if text.strip() == "{}":
        text = ""
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    logger.info(f"Wrote {path}")
    return text


def check_config(start_dir: str) -> Tuple[bool, bool, Optional[ConfigError]]:
    """Check for a usable config above start_dir.

    Returns:
        Tuple of (exists, valid, error)
    """
    path = find_config(start_dir)
    if path is None:
        return False, False, None

    try:
        load_config(path)
    except ConfigError as e:
        return True, False, e
    return True, True, None
