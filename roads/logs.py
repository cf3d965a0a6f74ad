# roads/logs.py

from typing import Optional

from loguru import logger

from roads import settings

LOG_FORMAT = "{time:HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def setup_logging(path: Optional[str] = None, level: Optional[str] = None) -> None:
    """
    Route loguru to a file sink.

    The terminal belongs to the UI while it runs, so the default stderr
    sink is removed.
    """
    logger.remove()
    logger.add(
        path or settings.LOG_FILE,
        format=LOG_FORMAT,
        level=level or settings.LOG_LEVEL,
        enqueue=True,
    )
    logger.debug("Logging initialised")
