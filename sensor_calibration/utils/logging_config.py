"""
Logging Configuration Utility

Routes the calibration tool's log records to a size-rotated file, and
optionally to stdout, according to the ``logging`` section of the
settings.
"""

import logging
import logging.handlers
import os
import sys
from typing import List

from ..config.settings import LoggingConfig

FILE_FORMAT = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'
DETAILED_FILE_FORMAT = ('%(asctime)s %(levelname)-8s %(name)s '
                        '[%(module)s.%(funcName)s:%(lineno)d] %(message)s')
CONSOLE_FORMAT = '%(levelname)s: %(message)s'

# Handlers added by the last setup_logging call
_installed_handlers: List[logging.Handler] = []


def _build_file_handler(config: LoggingConfig, level: int) -> logging.Handler:
    """Create the rotating file handler, making the log directory if needed."""
    log_dir = os.path.dirname(config.log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        config.log_file,
        maxBytes=int(config.max_file_size_mb * 1024 * 1024),
        backupCount=config.backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        DETAILED_FILE_FORMAT if config.detailed_format else FILE_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    return handler


def _build_console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _remove_installed_handlers(root: logging.Logger) -> None:
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()


def setup_logging(config: LoggingConfig) -> bool:
    """
    Configure the root logger from the logging settings.

    Calling it again replaces the handlers installed by the previous call
    and leaves any other handlers on the root logger alone. Console output
    is off by default so log lines do not interleave with the prompts.

    Args:
        config: Logging section of the tool settings

    Returns:
        bool: True if every requested handler was installed
    """
    root = logging.getLogger()
    _remove_installed_handlers(root)

    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    root.setLevel(level)

    handlers: List[logging.Handler] = []
    ok = True

    if config.log_file:
        try:
            handlers.append(_build_file_handler(config, level))
        except (OSError, ValueError) as e:
            print(f"Failed to open log file {config.log_file}: {e}")
            ok = False

    if config.console_output:
        handlers.append(_build_console_handler(level))

    if not handlers and not root.handlers:
        # Keeps the last-resort handler from printing warnings to stderr
        handlers.append(logging.NullHandler())

    for handler in handlers:
        root.addHandler(handler)
        _installed_handlers.append(handler)

    root.info(f"Logging initialized: level={config.level.upper()}, "
              f"file={config.log_file or 'disabled'}")
    return ok
