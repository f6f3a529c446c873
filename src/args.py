"""Argument parsing functionality for ReleaseGate."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="releasegate",
        description=(
            "ReleaseGate - check branch readiness, bump the project version "
            "and open a pull request"
        ),
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", required=True)

    pr_parser = subparsers.add_parser(
        "pr",
        help="Validate the branch, bump the version and print a pull-request link",
    )
    pr_parser.add_argument("bump",
                           help="Release type: patch, minor or major",
                           type=str.lower,
                           choices=Constants.BUMP_KINDS)
    pr_parser.add_argument("-C", "--directory",
                           dest="DIRECTORY",
                           help="Project root to operate on (default: current directory)",
                           action="store", type=str,
                           default=".")
    pr_parser.add_argument("--config",
                           dest="CONFIG",
                           help=f"Path to a YAML config file (default: <directory>/{Constants.CONFIG_FILE})",
                           action="store", type=str)
    pr_parser.add_argument("--remote",
                           dest="REMOTE",
                           help=f"Git remote to compare against (default: {Constants.DEFAULT_REMOTE})",
                           action="store", type=str)
    pr_parser.add_argument("--skip-tests",
                           dest="SKIP_TESTS",
                           help="Do not run the project's test command.",
                           action="store_true")
    pr_parser.add_argument("--dry-run",
                           dest="DRY_RUN",
                           help="Compute the next version and link without writing, committing or pushing.",
                           action="store_true")
    pr_parser.add_argument("--loglevel",
                           dest="LOG_LEVEL",
                           help="Set the logging level (default: $RELEASEGATE_LOG_LEVEL or INFO)",
                           action="store",
                           type=str.upper,
                           choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                           default=None)
    pr_parser.add_argument("--logfile",
                           dest="LOG_FILE",
                           help="Log output file",
                           action="store",
                           type=str)

    return parser.parse_args(argv)
