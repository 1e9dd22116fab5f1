"""Argument parsing functionality for gomod2tuple."""

import argparse
from constants import Constants

def build_parser():
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog=Constants.PROG,
        description=(
            "Convert vendor/modules.txt of a Go module into GH_TUPLE/GL_TUPLE "
            "entries for a ports Makefile"
        ),
        epilog=(
            "Environment: "
            f"{Constants.ENV_OFFLINE}=1 disables network access, "
            f"{Constants.ENV_GITHUB_TAGS}=1 enables Github tag lookups, "
            f"{Constants.ENV_PREFIX} sets the vendor prefix, "
            f'{Constants.ENV_GITHUB_CREDENTIALS}="username:token" sets Github credentials, '
            f"{Constants.ENV_GITLAB_TOKEN} sets the Gitlab private token."
        ),
        add_help=True,
    )

    parser.add_argument("MODULES_TXT",
                        help="Path to vendor/modules.txt",
                        action="store",
                        type=str)
    parser.add_argument("--offline",
                        dest="OFFLINE",
                        help="Disable all network access",
                        action="store_true",
                        default=None)
    parser.add_argument("--ghtags",
                        dest="GHTAGS",
                        help="Look up Github tags and nested module directories of submodules",
                        action="store_true",
                        default=None)
    parser.add_argument("--no-ghtags",
                        dest="GHTAGS",
                        help="Don't look up Github tags, overriding the config file and environment",
                        action="store_false",
                        default=None)
    parser.add_argument("--prefix",
                        dest="PREFIX",
                        help=f"Vendor directory prefix (default: {Constants.DEFAULT_PREFIX})",
                        action="store",
                        type=str)
    parser.add_argument("--workers",
                        dest="MAX_WORKERS",
                        help="Maximum number of concurrent lookups (default: CPU count)",
                        action="store",
                        type=int)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="YAML configuration file",
                        action="store",
                        type=str)
    parser.add_argument("--spack",
                        dest="SPACK",
                        help="Print Spack resource() declarations instead of tuples",
                        action="store_true")
    parser.add_argument("--app-version",
                        dest="APP_VERSION",
                        help="Application version for the Spack when= clause",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-v", "--version",
                        action="version",
                        version=f"%(prog)s {Constants.VERSION}")
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
