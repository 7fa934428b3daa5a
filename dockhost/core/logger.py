"""Logging for dockhost: one rich console handler plus optional file output.

Handlers live on the ``dockhost`` package logger only. Module loggers stay
at NOTSET and propagate to it, so ``--verbose`` reaches every module.
"""
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

console = Console()

ROOT_LOGGER_NAME = "dockhost"

LOG_DIR = Path.home() / ".dockhost"
LOG_FILE = LOG_DIR / "dockhost.log"

_file_logging_configured = False


def _root_logger() -> logging.Logger:
    """Return the package logger, attaching the console handler once."""
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)

    if not any(isinstance(h, RichHandler) for h in root_logger.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setLevel(logging.INFO)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(handler)
        if root_logger.level == logging.NOTSET:
            root_logger.setLevel(logging.INFO)

    return root_logger


def setup_file_logging(log_file: str = None, verbose: bool = False):
    """Set up file logging for dockhost operations.

    Args:
        log_file: Path to log file (defaults to ~/.dockhost/dockhost.log)
        verbose: Write debug records to the file. The console stays at INFO.

    Note:
        Creates log directory if it doesn't exist.
        Falls back to /tmp if the home directory is not writable.
    """
    global _file_logging_configured

    if _file_logging_configured:
        return

    target_log_file = Path(log_file) if log_file else LOG_FILE

    try:
        target_log_file.parent.mkdir(parents=True, exist_ok=True)
    except PermissionError:
        target_log_file = Path("/tmp/dockhost.log")

    level = logging.DEBUG if verbose else logging.INFO
    root_logger = _root_logger()

    file_handler = logging.FileHandler(target_log_file)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root_logger.addHandler(file_handler)
    root_logger.setLevel(level)

    _file_logging_configured = True

    root_logger.debug(f"dockhost logging initialized: {target_log_file}")


def get_logger(name: str) -> logging.Logger:
    """Get a module logger that reports through the dockhost handlers.

    Args:
        name: Logger name (typically __name__, under the dockhost package)
    """
    _root_logger()
    return logging.getLogger(name)
