"""Centralized path management for ghdep.

All ghdep files live under ~/.ghdep/:
- ~/.ghdep/debug/     - Log files
- ~/.ghdep/settings/  - Global settings (one file per setting)
"""

import logging
import os
import shlex
from pathlib import Path

LOG_FILENAME = "ghdep.log"

# Set by the CLI when --debug is passed
_debug_override = False


def ghdep_home() -> Path:
    """Return the ghdep home directory (~/.ghdep/)."""
    d = Path.home() / ".ghdep"
    d.mkdir(parents=True, exist_ok=True)
    return d


def debug_dir() -> Path:
    """Return the debug/logs directory (~/.ghdep/debug/)."""
    d = ghdep_home() / "debug"
    d.mkdir(parents=True, exist_ok=True)
    return d


def settings_dir() -> Path:
    """Return the settings directory (~/.ghdep/settings/)."""
    d = ghdep_home() / "settings"
    d.mkdir(parents=True, exist_ok=True)
    return d


def get_global_setting(name: str) -> bool:
    """Check if a global ghdep setting is enabled.

    A setting is enabled if its file exists and contains 'true'.
    """
    f = settings_dir() / name
    if not f.exists():
        return False
    try:
        return f.read_text().strip() == "true"
    except OSError:
        return False


def set_debug(enabled: bool = True) -> None:
    """Force debug logging on for this process, and raise existing loggers."""
    global _debug_override
    _debug_override = enabled
    level = logging.DEBUG if debug_enabled() else logging.INFO
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("ghdep") and isinstance(logger, logging.Logger):
            logger.setLevel(level)


def debug_enabled() -> bool:
    """Debug mode: --debug flag, GHDEP_DEBUG=1, or the 'debug' setting."""
    if _debug_override:
        return True
    if os.environ.get("GHDEP_DEBUG", "") not in ("", "0"):
        return True
    return get_global_setting("debug")


def command_log_file() -> Path:
    """Get the path to the shared log file (~/.ghdep/debug/ghdep.log)."""
    return debug_dir() / LOG_FILENAME


def configure_logger(name: str, max_bytes: int = 10_000_000) -> logging.Logger:
    """Configure a logger that always writes to file with rotation.

    Args:
        name: Logger name (e.g., "ghdep.tui")
        max_bytes: Maximum log file size before rotation (default 10MB)

    Returns:
        Configured logger instance
    """
    from logging.handlers import RotatingFileHandler

    logger = logging.getLogger(name)

    # Avoid adding duplicate handlers
    if logger.handlers:
        return logger

    handler = RotatingFileHandler(
        command_log_file(),
        maxBytes=max_bytes,
        backupCount=1,
    )
    handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s", datefmt="%H:%M:%S"
    ))
    logger.addHandler(handler)
    logger.propagate = False

    if debug_enabled():
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    return logger


def log_shell_command(cmd: list[str] | str, prefix: str = "shell", returncode: int | None = None) -> None:
    """Log a shell command to the central command log.

    Args:
        cmd: Command list or string to log
        prefix: Prefix for the log entry (e.g., "gh")
        returncode: If provided, logs as completion with return code
    """
    cmd_str = shlex.join(cmd) if isinstance(cmd, list) else cmd
    logger = configure_logger("ghdep.shell")
    if returncode is None:
        logger.info("%s: %s", prefix, cmd_str)
    elif returncode == 0:
        logger.info("%s done: %s", prefix, cmd_str)
    else:
        logger.warning("%s failed (rc=%d): %s", prefix, returncode, cmd_str)
