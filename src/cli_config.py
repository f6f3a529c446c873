"""Release configuration: defaults from Constants, overrides from YAML and CLI.

The YAML file is optional. Recognised keys:

    remote: origin
    pr_title: "..."
    pr_body: "..."
    commit_message: "chore: release {version}"
    test_commands:
      node: ["npm", "run", "test:ci"]
      dotnet: ["dotnet", "test", "--no-build"]
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from constants import Constants
from errors import ConfigError

logger = logging.getLogger(__name__)

_KNOWN_KEYS = {"remote", "pr_title", "pr_body", "commit_message", "test_commands"}


@dataclass
class ReleaseConfig:
    """Runtime tunables for a release run."""

    remote: str = Constants.DEFAULT_REMOTE
    pr_title: str = Constants.PR_TITLE
    pr_body: str = Constants.PR_BODY
    commit_message: str = Constants.COMMIT_MESSAGE
    test_commands: Dict[str, List[str]] = field(default_factory=dict)
    skip_tests: bool = False
    dry_run: bool = False

    def format_commit_message(self, version) -> str:
        return self.commit_message.format(version=version)


def _load_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Couldn't read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Couldn't parse config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def _validate_test_commands(value: Any, path: str) -> Dict[str, List[str]]:
    if not isinstance(value, dict):
        raise ConfigError(f"'test_commands' in {path} must be a mapping")
    commands: Dict[str, List[str]] = {}
    for kind, cmd in value.items():
        if kind not in Constants.TEST_COMMANDS:
            logger.warning("Ignoring test command for unknown project type '%s'", kind)
            continue
        if isinstance(cmd, str):
            cmd = cmd.split()
        if not isinstance(cmd, list) or not cmd or not all(isinstance(c, str) for c in cmd):
            raise ConfigError(f"Test command for '{kind}' in {path} must be a non-empty list of strings")
        commands[kind] = cmd
    return commands


def load_config(root: str = ".", path: Optional[str] = None) -> ReleaseConfig:
    """Load configuration from ``path`` or ``<root>/.releasegate.yml``.

    A missing default file yields the defaults; a missing explicit file is
    an error.
    """
    config = ReleaseConfig()
    if path is None:
        path = os.path.join(root, Constants.CONFIG_FILE)
        if not os.path.isfile(path):
            return config
    data = _load_yaml(path)

    for key in sorted(set(data) - _KNOWN_KEYS):
        logger.warning("Ignoring unknown config key '%s' in %s", key, path)

    for key in ("remote", "pr_title", "pr_body", "commit_message"):
        if key in data:
            value = data[key]
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"'{key}' in {path} must be a non-empty string")
            setattr(config, key, value)
    try:
        config.format_commit_message(Constants.INITIAL_VERSION)
    except (KeyError, IndexError, ValueError) as e:
        raise ConfigError(f"'commit_message' in {path} may only use the {{version}} placeholder") from e
    if "test_commands" in data:
        config.test_commands = _validate_test_commands(data["test_commands"], path)

    logger.debug("Loaded config from %s", path)
    return config


def apply_cli_overrides(config: ReleaseConfig, args) -> ReleaseConfig:
    """Apply CLI flags over file configuration; CLI has highest precedence."""
    if getattr(args, "REMOTE", None):
        config.remote = args.REMOTE
    if getattr(args, "SKIP_TESTS", False):
        config.skip_tests = True
    if getattr(args, "DRY_RUN", False):
        config.dry_run = True
    return config
