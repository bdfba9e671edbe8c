# app/core/logger.py
import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from app.config.settings import Settings

LOGGER_NAME = "app"


def setup_logging(settings: Settings) -> logging.Logger:
    """
    Configure the application logger.

    - Console output always
    - Optional daily rotating log file (``log_to_file``)
    - Unified format with timestamp and level
    - Safe to call more than once (handlers are only added the first time)
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.log_level.upper())

    # Avoid duplicate handlers if setup_logging() is called multiple times
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if settings.log_to_file:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = TimedRotatingFileHandler(
            filename=log_dir / settings.log_file_name,
            when="midnight",
            interval=1,
            backupCount=settings.log_backup_count,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(
        f"Logger initialized (level={settings.log_level.upper()}, "
        f"file={'on' if settings.log_to_file else 'off'})"
    )
    return logger
