"""ReleaseGate - pull-request release assistant

    Returns:
        int: Exit code
"""
import logging
import sys

from args import parse_args
from cli_config import apply_cli_overrides, load_config
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from errors import (
    ManifestWriteError,
    ProjectDescriptorError,
    ReleaseGateError,
    RepositoryStateError,
    TestRunFailed,
    ValidationError,
)
from release.orchestrator import ReleaseOrchestrator

logger = logging.getLogger(__name__)


def exit_code_for(error: ReleaseGateError) -> ExitCodes:
    """Map a failure to the process exit code."""
    if isinstance(error, RepositoryStateError):
        return ExitCodes.REPOSITORY_NOT_READY
    if isinstance(error, ManifestWriteError):
        return ExitCodes.VERSION_UPDATE_ERROR
    if isinstance(error, ProjectDescriptorError):
        return ExitCodes.PROJECT_ERROR
    if isinstance(error, TestRunFailed):
        return ExitCodes.TEST_FAILURE
    if isinstance(error, ValidationError):
        return ExitCodes.USAGE_ERROR
    return ExitCodes.TOOL_ERROR


def run_pr(args) -> int:
    """Run the pull-request flow for parsed CLI arguments."""
    config = apply_cli_overrides(load_config(args.DIRECTORY, args.CONFIG), args)
    orchestrator = ReleaseOrchestrator(root=args.DIRECTORY, config=config)
    orchestrator.run_pull_request(args.bump)
    return ExitCodes.SUCCESS.value


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL)
    if args.LOG_FILE:
        add_file_handler(args.LOG_FILE)
        logger.info("Logging to file: %s", args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug("CLI start", extra=extra_context(
            event="function_entry", component="cli", action=args.action,
        ))

    try:
        code = run_pr(args)
    except ReleaseGateError as e:
        logger.error("%s", e)
        code = exit_code_for(e).value
    sys.exit(code)


if __name__ == "__main__":
    main()
