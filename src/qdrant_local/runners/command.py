"""External command invocation.

Every shell-out in the package goes through ``run_command`` so callers only
ever see a ``CommandResult``; launch failures never surface as exceptions.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Exit code reported for processes that never ran.
LAUNCH_FAILURE_EXIT_CODE = 1


@dataclass(frozen=True)
class CommandResult:
    """Captured output of an external command."""

    stdout: str
    stderr: str
    exit_code: int

    @property
    def success(self) -> bool:
        return self.exit_code == 0


CommandRunner = Callable[[str, Sequence[str]], CommandResult]


def run_command(
    command: str,
    args: Sequence[str],
    timeout: float | None = None,
) -> CommandResult:
    """Run ``command`` with ``args`` and wait for it to exit.

    Args:
        command: Executable name, resolved on PATH
        args: Ordered arguments, passed without shell interpretation
        timeout: Optional limit in seconds

    Returns:
        CommandResult. A command that could not be launched, or that ran past
        ``timeout``, is reported with exit code 1 and the reason in stderr.
    """
    argv = [command, *args]
    logger.debug(f"Running: {' '.join(argv)}")

    try:
        completed = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        message = f"Command timed out after {timeout}s: {command}"
        logger.debug(message)
        return CommandResult(stdout="", stderr=message, exit_code=LAUNCH_FAILURE_EXIT_CODE)
    except OSError as e:
        logger.debug(f"Failed to launch {command}: {e}")
        return CommandResult(stdout="", stderr=str(e), exit_code=LAUNCH_FAILURE_EXIT_CODE)

    # Negative return codes mean the child was killed by a signal.
    exit_code = completed.returncode if completed.returncode >= 0 else LAUNCH_FAILURE_EXIT_CODE
    return CommandResult(
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
        exit_code=exit_code,
    )
