"""Logging setup for Cosmoscale.

Modules log through `from loguru import logger`; `setup_logging` only
decides where those records go: a colored console sink at the configured
level and a size-rotated file sink that always records DEBUG output.
"""

import sys
from pathlib import Path

from loguru import logger
from platformdirs import user_log_dir

from cosmoscale.config.manager import ConfigManager


LOG_FILENAME = "cosmoscale.log"

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"


def get_log_dir() -> Path:
    return Path(user_log_dir("Cosmoscale", "Cosmoscale"))


def setup_logging(config: ConfigManager, log_dir: Path | None = None) -> Path | None:
    """Replace loguru's sinks with the ones the `logging` group asks for.

    `log_dir` overrides the platform log directory. Returns the log file
    path, or None when file logging is off.
    """
    level = config.get("logging", "log_level", "INFO")
    logger.remove()

    if config.get("logging", "log_console_output", True):
        logger.add(sys.stderr, format=_CONSOLE_FORMAT, level=level, colorize=True)

    log_path = None
    if config.get("logging", "log_to_file", True):
        target_dir = Path(log_dir) if log_dir is not None else get_log_dir()
        target_dir.mkdir(parents=True, exist_ok=True)
        log_path = target_dir / LOG_FILENAME
        logger.add(
            str(log_path),
            format=_FILE_FORMAT,
            level="DEBUG",
            rotation=f"{config.get('logging', 'log_max_size_mb', 50)} MB",
            retention=f"{config.get('logging', 'log_retention_days', 30)} days",
            compression="zip",
            encoding="utf-8",
            enqueue=True,
        )

    logger.info(f"Logging initialized (console={level}, file={log_path or 'off'})")
    return log_path
