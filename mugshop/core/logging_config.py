"""
Logging setup - console plus optional rotating log file
"""
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from .config import settings


def setup_logging(level: Optional[str] = None, logs_path: Optional[str] = None) -> None:
    level_name = (level or settings.LOG_LEVEL).upper()
    logs_path = logs_path if logs_path is not None else settings.LOGS_PATH

    handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    ))
    handlers.append(console_handler)

    if logs_path:
        os.makedirs(logs_path, exist_ok=True)
        # 10MB per file, keep 7 files
        file_handler = RotatingFileHandler(
            os.path.join(logs_path, "mugshop.log"),
            maxBytes=10*1024*1024,
            backupCount=7,
            encoding='utf-8'
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        handlers.append(file_handler)

    # Quiet noisy libraries before configuring the root logger
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.pool').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)

    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), handlers=handlers, force=True)
