import sys
from loguru import logger
import os

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

def setup_logging(debug_mode: bool = True, log_dir: str = "logs",
                  rotation: str = "10 MB", retention: str = "1 week"):
    """
    Configures Loguru sinks for the dashboard application.

    Console output follows ``debug_mode``; the file sink (skipped when
    ``log_dir`` is empty) always records DEBUG so layout decode warnings
    can be inspected after a failed restore.
    """
    logger.remove()

    level = "DEBUG" if debug_mode else "INFO"
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        logger.add(os.path.join(log_dir, "dashdock_{time}.log"), rotation=rotation, retention=retention, level="DEBUG")

    logger.info(f"Logging initialized (level={level}, log_dir={log_dir or '-'})")
