"""Run the project's own test command before a release."""

from __future__ import annotations

import logging
import subprocess
from typing import Dict, List, Optional

from constants import Constants
from errors import TestRunFailed
from versioning.models import Ecosystem

logger = logging.getLogger(__name__)


def command_for(ecosystem: Ecosystem, overrides: Optional[Dict[str, List[str]]] = None) -> List[str]:
    """Return the test command for ``ecosystem``, honoring config overrides."""
    commands = dict(Constants.TEST_COMMANDS)
    if overrides:
        commands.update(overrides)
    return list(commands[ecosystem.value])


def run_tests(ecosystem: Ecosystem, cwd: Optional[str] = None,
              overrides: Optional[Dict[str, List[str]]] = None) -> None:
    """Run the ecosystem's standard test command.

    Raises:
        TestRunFailed: the command exited non-zero or could not be started.
    """
    command = command_for(ecosystem, overrides)
    logger.debug("Running tests: %s", " ".join(command))
    try:
        proc = subprocess.run(command, cwd=cwd, capture_output=True, text=True, check=False)
    except OSError as e:
        logger.error("Couldn't start test command %s: %s", command[0], e)
        raise TestRunFailed(command, 127) from e
    if proc.returncode != 0:
        tail = (proc.stdout or "")[-2000:] + (proc.stderr or "")[-2000:]
        if tail.strip():
            logger.error("Test output:\n%s", tail.rstrip())
        raise TestRunFailed(command, proc.returncode)
