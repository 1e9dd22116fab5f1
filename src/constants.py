"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    FORMAT_ERROR = 3


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    VERSION = "2.2.0"
    PROG = "gomod2tuple"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    # Manifest
    SPEC_PREFIX = "# "
    REPLACE_SEP = " => "
    DEFAULT_PREFIX = "vendor"

    # Tuples
    UNRESOLVED_GROUP = "group_name"
    TUPLE_INLINE_LIMIT = 2
    SHORT_COMMIT_LEN = 12

    # Repository API constants
    GITHUB_SITE = "https://github.com"
    GITHUB_API_BASE = "https://api.github.com"
    GITLAB_DEFAULT_SITE = "https://gitlab.com"
    GITLAB_API_PATH = "/api/v4"

    # Environment
    ENV_GITHUB_CREDENTIALS = "M2T_GITHUB"
    ENV_GITLAB_TOKEN = "M2T_GITLAB"
    ENV_OFFLINE = "M2T_OFFLINE"
    ENV_GITHUB_TAGS = "M2T_GHTAGS"
    ENV_PREFIX = "M2T_PREFIX"
    ENV_DEBUG = "M2T_DEBUG"
    ENV_LOG_LEVEL = "M2T_LOG_LEVEL"
