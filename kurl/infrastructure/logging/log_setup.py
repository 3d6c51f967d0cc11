# infrastructure/logging/log_setup.py
import sys

from loguru import logger

_LEVELS = ("WARNING", "INFO", "DEBUG", "TRACE")

LOG_FORMAT = "<level>{level: <7}</level> {message}"


def level_for_verbosity(verbose: int) -> str:
    return _LEVELS[max(0, min(verbose, len(_LEVELS) - 1))]


def setup_console_logging(level: str = "WARNING", sink=None) -> None:
    logger.remove()
    logger.add(sink or sys.stderr, level=level, format=LOG_FORMAT, colorize=False)
