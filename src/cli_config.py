"""Runtime configuration assembled from defaults, YAML, environment and CLI.

Precedence, lowest to highest: built-in defaults, the YAML file given with
``--config``, ``M2T_*`` environment variables, command-line flags.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Mapping, Optional

import yaml

from constants import Constants
from tuples.models import ResolverConfig

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """The configuration file is unreadable or malformed."""


def load_yaml_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load the YAML configuration file.

    Args:
        config_path: Path to the YAML file, or None.

    Returns:
        The top-level mapping, empty when no path is given.

    Raises:
        ConfigError: When the file cannot be read or parsed.
    """
    if not config_path:
        return {}
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"cannot read config file {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"cannot parse config file {config_path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file {config_path} must contain a mapping")
    return data


def _yaml_bool(data: Mapping[str, Any], key: str) -> bool:
    value = data[key]
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value


def _yaml_int(data: Mapping[str, Any], key: str) -> int:
    value = data[key]
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    return value


def _apply_yaml(config: ResolverConfig, data: Mapping[str, Any]) -> None:
    if "offline" in data:
        config.offline = _yaml_bool(data, "offline")
    if "lookup_github_tags" in data:
        config.lookup_github_tags = _yaml_bool(data, "lookup_github_tags")
    if data.get("prefix"):
        config.prefix = str(data["prefix"])
    if data.get("max_workers") is not None:
        config.max_workers = _yaml_int(data, "max_workers")
    github = data.get("github") or {}
    if isinstance(github, dict):
        config.github_username = github.get("username") or config.github_username
        config.github_token = github.get("token") or config.github_token
    gitlab = data.get("gitlab") or {}
    if isinstance(gitlab, dict):
        config.gitlab_token = gitlab.get("token") or config.gitlab_token


def _apply_env(config: ResolverConfig, environ: Mapping[str, str]) -> None:
    if environ.get(Constants.ENV_OFFLINE):
        config.offline = environ[Constants.ENV_OFFLINE] == "1"
    if environ.get(Constants.ENV_GITHUB_TAGS):
        config.lookup_github_tags = environ[Constants.ENV_GITHUB_TAGS] == "1"
    if environ.get(Constants.ENV_PREFIX):
        config.prefix = environ[Constants.ENV_PREFIX]

    credentials = environ.get(Constants.ENV_GITHUB_CREDENTIALS)
    if credentials:
        username, sep, token = credentials.partition(":")
        if sep and username and token:
            config.github_username, config.github_token = username, token
        else:
            logger.warning(
                "Ignoring %s: expected \"username:personal_access_token\"",
                Constants.ENV_GITHUB_CREDENTIALS,
            )
    if environ.get(Constants.ENV_GITLAB_TOKEN):
        config.gitlab_token = environ[Constants.ENV_GITLAB_TOKEN]


def _apply_args(config: ResolverConfig, args) -> None:
    if getattr(args, "OFFLINE", None):
        config.offline = True
    if getattr(args, "GHTAGS", None) is not None:
        config.lookup_github_tags = args.GHTAGS
    if getattr(args, "PREFIX", None):
        config.prefix = args.PREFIX
    if getattr(args, "MAX_WORKERS", None) is not None:
        config.max_workers = args.MAX_WORKERS


def load_config(args=None, environ: Optional[Mapping[str, str]] = None) -> ResolverConfig:
    """Build the ResolverConfig for a run.

    Raises:
        ConfigError: When the YAML file is unreadable or malformed.
    """
    environ = os.environ if environ is None else environ
    config = ResolverConfig()
    _apply_yaml(config, load_yaml_config(getattr(args, "CONFIG", None)))
    _apply_env(config, environ)
    _apply_args(config, args)
    if config.max_workers is not None and config.max_workers < 1:
        raise ConfigError(f"max_workers must be positive, got {config.max_workers}")
    return config
