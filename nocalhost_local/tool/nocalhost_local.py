"""Command line tool for developing workloads of applications deployed with nhctl."""

import argparse
import asyncio
import logging
import sys
import traceback

from nocalhost_local.exceptions import NocalhostException
from . import app, config, dev, shell

_LOGGER = logging.getLogger(__name__)


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Command line utility for developing workloads with nhctl.",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    )

    subparsers = parser.add_subparsers(dest="command", help="Command", required=True)

    config.ConfigAction.register(subparsers)
    dev.DevAction.register(subparsers)
    app.AppAction.register(subparsers)
    shell.ShellAction.register(subparsers)
    return parser


def main() -> None:
    """nocalhost-local command line tool main entry point."""
    parser = _make_parser()
    args = parser.parse_args()

    if args.log_level:
        logging.basicConfig(level=args.log_level)

    action = args.cls()
    try:
        asyncio.run(action.run(**vars(args)))
    except NocalhostException as err:
        if args.log_level == "DEBUG":
            traceback.print_exc(file=sys.stderr)
        print("nocalhost-local error: ", err, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
