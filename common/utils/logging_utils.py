import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


def setup_logger(app=None, log_level=None, log_to_file=True):
    if log_level is None:
        log_level = logging.INFO

    #NOTE: module loggers are children of 'yourtube', so the handlers live there
    logger = logging.getLogger('yourtube')
    logger.setLevel(log_level)

    if app:
        app.logger.setLevel(log_level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt='[%(asctime)s] %(levelname)s in %(name)s (%(filename)s:%(lineno)d): %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_to_file:
        log_dir = Path('logs')
        log_dir.mkdir(exist_ok=True)

        #NOTE: 10MB rotation, 5 backups
        file_handler = RotatingFileHandler(
            log_dir / 'yourtube.log',
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)

        error_handler = RotatingFileHandler(
            log_dir / 'error.log',
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)

        logger.addHandler(file_handler)
        logger.addHandler(error_handler)

    return logger


def get_logger(name=None):
    if name:
        return logging.getLogger(f'yourtube.{name}')
    return logging.getLogger('yourtube')
