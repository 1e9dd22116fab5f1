#! /usr/bin/env python3
"""gomod2tuple - Go vendor/modules.txt to ports GH_TUPLE/GL_TUPLE converter

    Reads vendor/modules.txt, resolves every module to its Github or Gitlab
    mirror and prints the tuples, post-extract symlinks and any entries that
    need manual attention.
"""

import logging
import sys

from args import parse_args
from cli_config import ConfigError, load_config
from common.http_client import HttpError
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from tuples.errors import SpecFormatError
from tuples.service import load


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    configure_logging(level=args.LOG_LEVEL, logfile=args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    try:
        config = load_config(args)
    except ConfigError as e:
        logging.error("%s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    try:
        result = load(args.MODULES_TXT, config)
    except FileNotFoundError as e:
        logging.error("File not found: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except OSError as e:
        logging.error("IO error: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except UnicodeDecodeError as e:
        logging.error("File %s is not valid UTF-8: %s, aborting", args.MODULES_TXT, e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except SpecFormatError as e:
        logging.error("%s, aborting", e)
        sys.exit(ExitCodes.FORMAT_ERROR.value)
    except HttpError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.CONNECTION_ERROR.value)

    if args.SPACK:
        output = result.render_spack(args.APP_VERSION)
    else:
        output = result.render()
    if output:
        print(output)

    if result.has_errors:
        logging.warning("Some packages need manual attention, see the comments in the output.")
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
