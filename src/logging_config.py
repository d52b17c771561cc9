import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FILE_NAME = "league_tracker.log"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _has_file_handler(logger: logging.Logger, log_file: Path) -> bool:
    target = os.path.abspath(log_file)
    return any(
        isinstance(h, logging.handlers.RotatingFileHandler) and h.baseFilename == target
        for h in logger.handlers
    )


def setup_logging(log_level: str = "INFO", log_dir: Optional[Path] = None) -> Path:
    """Configure logging for league report runs.

    Parser decisions are logged at DEBUG, so the file handler always records
    DEBUG while the console follows *log_level*. Calling again for the same
    log file changes nothing.

    Returns:
        Path of the log file.
    """
    log_dir = Path(log_dir) if log_dir is not None else LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    # Root stays at DEBUG so block-level parser decisions reach the file
    root_logger.setLevel(logging.DEBUG)

    if _has_file_handler(root_logger, log_file):
        return log_file  # Already configured

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # File handler with rotation (5MB max, keep 3 backups)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).info(
        "Logging to %s (console level=%s)", log_file, logging.getLevelName(level)
    )
    return log_file
