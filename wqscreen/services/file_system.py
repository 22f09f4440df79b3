import logging
from pathlib import Path

logger = logging.getLogger(__name__)

def create_directory(dir_path: str):
    """
    Ensures an output directory (and its parents) exists.
    Failure is fatal for the caller, so the OSError is logged and re-raised.
    """
    try:
        Path(dir_path).mkdir(parents=True, exist_ok=True)
        logger.debug(f"Output directory ready: {dir_path}")
    except OSError as e:
        logger.error(f"Cannot create output directory {dir_path}: {e}")
        raise
