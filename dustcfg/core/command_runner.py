"""Blocking execution of external commands."""

import logging
import subprocess
from typing import List, Optional

from ..models.service import CommandResult

logger = logging.getLogger(__name__)


def run_command(cmd: List[str], timeout: Optional[float] = None) -> CommandResult:
    """Run a command to completion and capture its outcome.

    A non-zero exit status is reported in the result, not raised. A missing
    executable still raises, since nothing was run at all.

    Args:
        cmd: Argument vector
        timeout: Seconds to wait before killing the command, None waits forever

    Returns:
        CommandResult for the command

    Raises:
        OSError: If the command could not be started
    """
    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except subprocess.TimeoutExpired as e:
        logger.error(f"Timeout after {timeout}s running: {' '.join(cmd)}")
        return CommandResult(
            command=list(cmd),
            returncode=None,
            stdout=_as_text(e.stdout),
            stderr=_as_text(e.stderr),
            timed_out=True
        )

    outcome = CommandResult(
        command=list(cmd),
        returncode=result.returncode,
        stdout=result.stdout or "",
        stderr=result.stderr or ""
    )
    if not outcome.ok:
        logger.warning(outcome.describe())
    return outcome


def _as_text(output) -> str:
    # TimeoutExpired carries bytes even when text=True was requested
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output
