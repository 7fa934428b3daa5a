"""Run CLI commands and report their outcome as a CommandResult."""
import subprocess
from dataclasses import dataclass, field
from typing import Any, List, Optional

from dockhost.core.logger import get_logger

logger = get_logger(__name__)


@dataclass
class CommandResult:
    """Outcome of a CLI call.

    ``data`` carries the parsed payload of a successful call; ``message``
    holds stderr (or a description of the failure) when it did not succeed.
    """
    success: bool
    message: str = ""
    data: Any = None
    stdout: str = ""
    command: List[str] = field(default_factory=list)


def run_command(cmd: List[str], timeout: Optional[int] = None) -> CommandResult:
    """Run a command and capture its output.

    Args:
        cmd: Command and arguments
        timeout: Seconds before the command is abandoned

    Returns:
        CommandResult; a non-zero exit, a timeout or a missing executable
        all come back as ``success=False``
    """
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.error(f"Command timed out after {timeout}s: {' '.join(cmd)}")
        return CommandResult(success=False, message=f"timed out after {timeout}s", command=cmd)
    except FileNotFoundError:
        logger.error(f"Command not found: {cmd[0]}")
        return CommandResult(success=False, message=f"{cmd[0]} not found", command=cmd)

    stdout = result.stdout.strip()
    if result.returncode != 0:
        message = result.stderr.strip() or stdout
        logger.debug(f"Command failed ({result.returncode}): {message}")
        return CommandResult(success=False, message=message, stdout=stdout, command=cmd)

    return CommandResult(success=True, message=stdout, stdout=stdout, command=cmd)
