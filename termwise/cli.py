import argparse
import os
import sys
from typing import List, Optional

from . import build
from .config import BuildInfo, get_config, parse_bool
from .errors import ConfigError
from .handlers import handle_query, handle_upgrade
from .logger import setup_logging
from .release import VersionResolver, latest_release_url
from .ui import console, display_error, display_home_page
from .upgrade import StartupAdvisory

UPGRADE_COMMAND = "upgrade"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termwise",
        description="Turn a plain-language request into a shell command using the Gemini API.",
        epilog=f"Run 'termwise {UPGRADE_COMMAND}' to replace this executable with the latest release.",
    )
    parser.add_argument("-v", "--version", action="store_true", help="Print the version of this build and exit.")
    parser.add_argument(
        "-x", "--execute", action="store_true",
        help="Run the suggested command after asking for confirmation."
    )
    parser.add_argument(
        "query", nargs=argparse.REMAINDER,
        help=f"What you want to do, in plain language, or '{UPGRADE_COMMAND}'."
    )
    return parser


def run_cli(argv: Optional[List[str]] = None) -> int:
    """Parses the command line, runs the requested command and returns its exit status."""
    if argv is None:
        argv = sys.argv[1:]

    # If no arguments are given, show the home page.
    if not argv:
        display_home_page(console)
        return 0

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        console.print(f"termwise {build.VERSION}")
        return 0

    if not args.query:
        parser.error("a query is required")

    if args.query == [UPGRADE_COMMAND]:
        # Upgrading must keep working when the config file is broken or absent.
        setup_logging(verbose=parse_bool(os.environ.get("TERMWISE_VERBOSE", "")))
        return handle_upgrade(BuildInfo.from_environment())

    try:
        config = get_config()
    except ConfigError as e:
        display_error(str(e))
        return 1
    setup_logging(verbose=config.verbose, log_dir=config.log_dir)

    advisory = StartupAdvisory(VersionResolver(latest_release_url(config.release_repo)))
    advisory.maybe_warn(config.build_info())
    return handle_query(config, " ".join(args.query), execute=args.execute)
