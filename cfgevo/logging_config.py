import logging
import os
from logging import Logger
from logging.handlers import RotatingFileHandler
from typing import Iterator

LOG_FILE = os.getenv("LOG_FILE", "cfgevo.log")
LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
MAX_BYTES = 2 * 1024 * 1024


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _file_handler(path: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=MAX_BYTES, backupCount=2, delay=True)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    return handler


def _cfgevo_loggers() -> Iterator[Logger]:
    for name in list(logging.Logger.manager.loggerDict):
        if name == "cfgevo" or name.startswith("cfgevo."):
            yield logging.getLogger(name)


def setup_logger(name: str, log_file: str | None = None, level: str = "INFO") -> Logger:
    """
    Logger writing to a rotating file. LOG_LEVEL and LOG_FILE from the environment
    take precedence over the defaults; the file is only created once something is logged.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.addHandler(_file_handler(log_file or os.getenv("LOG_FILE", LOG_FILE)))
    logger.setLevel(_level(os.getenv("LOG_LEVEL", level)))
    return logger


def set_level(level: str) -> None:
    """Apply level to every cfgevo logger created so far."""
    for logger in _cfgevo_loggers():
        logger.setLevel(_level(level))


def set_file(log_file: str) -> None:
    """Move every cfgevo logger created so far to log_file."""
    path = os.path.abspath(log_file)
    for logger in _cfgevo_loggers():
        for handler in list(logger.handlers):
            if isinstance(handler, RotatingFileHandler) and handler.baseFilename != path:
                logger.removeHandler(handler)
                handler.close()
                logger.addHandler(_file_handler(path))
