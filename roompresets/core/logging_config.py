"""
Logging Configuration

The controller logs to a rotating application log plus a separate device
log that records every request sent to the RoomOS endpoint. Logging is set
up twice: once with defaults before anything else is imported, and again
once the settings file has been read, since the file chooses the log
directory and levels.
"""
import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional, Union

DEFAULT_LOG_DIR = Path.home() / ".config" / "roompresets" / "logs"

# Everything under roompresets.device also goes to device.log
DEVICE_LOGGER = 'roompresets.device'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_installed: List[logging.Handler] = []


def resolve_level(level: Union[int, str]) -> int:
    """
    Turn a level name from the settings file into a logging level.

    Raises:
        ValueError: if the name is not a standard logging level
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level '{level}'")
    return value


def _rotating_handler(path: Path, level: int) -> logging.Handler:
    # 10MB per file, keep 5 backups
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _remove_installed():
    root_logger = logging.getLogger()
    device_logger = logging.getLogger(DEVICE_LOGGER)
    for handler in _installed:
        root_logger.removeHandler(handler)
        device_logger.removeHandler(handler)
        handler.close()
    _installed.clear()


def setup_logging(log_dir: Optional[Path] = None,
                  log_level: Union[int, str] = logging.INFO,
                  console_level: Union[int, str] = logging.WARNING,
                  device_log: bool = True) -> logging.Logger:
    """
    Configure the root logger, replacing handlers from an earlier call.

    Args:
        log_dir: Directory for log files (defaults to ~/.config/roompresets/logs)
        log_level: Level for the application log, as a number or a name
        console_level: Level for console output
        device_log: Also write device traffic to device.log

    Returns:
        The root logger
    """
    level = resolve_level(log_level)
    console = resolve_level(console_level)
    log_dir = Path(log_dir) if log_dir else DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    _remove_installed()

    root_logger = logging.getLogger()
    root_logger.setLevel(min(level, console))

    file_handler = _rotating_handler(log_dir / "roompresets.log", level)
    root_logger.addHandler(file_handler)
    _installed.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)
    _installed.append(console_handler)

    if device_log:
        # Request-level detail is logged at DEBUG by the gateway
        device_handler = _rotating_handler(log_dir / "device.log", logging.DEBUG)
        device_logger = logging.getLogger(DEVICE_LOGGER)
        device_logger.setLevel(logging.DEBUG)
        device_logger.addHandler(device_handler)
        _installed.append(device_handler)
    else:
        logging.getLogger(DEVICE_LOGGER).setLevel(logging.NOTSET)

    logging.getLogger('PyQt6').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)

    return root_logger
