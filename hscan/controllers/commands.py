"""
External command helpers

Thin wrappers around subprocess used for the scanner, converter, spooler and
desktop opener. Commands are run synchronously and their outcome is returned
as a CommandResult; a missing executable is reported the same way a shell
would (exit code 127) instead of raising.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from hscan.models.document import CommandResult

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127

# Detached children stay referenced until they exit so Popen.__del__ does not
# warn about a still running process.
_detached_processes: list[subprocess.Popen] = []


def run_command(args: Sequence[str], stdout_path: Optional[Path] = None) -> CommandResult:
    """Run a command to completion and capture its output.

    Args:
        args: Program and arguments.
        stdout_path: If given, stdout is written to this file and only stderr
            is captured. Otherwise stdout and stderr are captured together.

    Returns:
        CommandResult: Exit status and captured text.
    """
    args = [str(arg) for arg in args]
    logger.debug("Running: %s", " ".join(args))

    try:
        if stdout_path is not None:
            with open(stdout_path, "wb") as stdout_file:
                completed = subprocess.run(args, stdout=stdout_file, stderr=subprocess.PIPE)
        else:
            completed = subprocess.run(args, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
    except OSError as e:
        logger.debug("Could not start %s: %s", args[0], e)
        return CommandResult(args=args, returncode=COMMAND_NOT_FOUND, output=str(e))

    captured = completed.stderr if stdout_path is not None else completed.stdout
    output = captured.decode(errors="replace") if captured else ""
    return CommandResult(args=args, returncode=completed.returncode, output=output)


def spawn_detached(args: Sequence[str]) -> bool:
    """Start a command in its own session without waiting for it.

    Output is discarded. Returns False only when the program could not be
    started at all.
    """
    args = [str(arg) for arg in args]
    logger.debug("Launching: %s", " ".join(args))
    _detached_processes[:] = [p for p in _detached_processes if p.poll() is None]
    try:
        process = subprocess.Popen(
            args,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        logger.debug("Could not launch %s: %s", args[0], e)
        return False
    _detached_processes.append(process)
    return True
