"""
Logging setup for applications embedding the analytics engine.
"""
import logging
from pathlib import Path
from typing import Optional

from goal_analytics.constants import DEFAULT_LOG_DIRECTORY_DEV
from goal_analytics.core.config import get_log_settings


def configure_logging(log_dir: Optional[str] = None) -> Path:
    """
    Configure root logging with a file handler and a console handler.

    Directory, file name and level come from GOAL_ANALYTICS_LOG_DIR,
    GOAL_ANALYTICS_LOG_FILE and GOAL_ANALYTICS_LOG_LEVEL. If the directory
    cannot be created (e.g. /var/log without permissions), falls back to a
    local ./logs directory.

    Args:
        log_dir: Explicit directory, overrides the environment

    Returns:
        Path of the log file in use
    """
    settings = get_log_settings()
    directory = log_dir or settings["log_dir"]

    try:
        Path(directory).mkdir(parents=True, exist_ok=True)
    except PermissionError:
        directory = DEFAULT_LOG_DIRECTORY_DEV
        Path(directory).mkdir(parents=True, exist_ok=True)
    log_path = Path(directory) / settings["log_file"]

    logging.basicConfig(
        level=getattr(logging, settings["log_level"], logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_path),
            logging.StreamHandler()  # Also log to console
        ],
        force=True
    )

    logging.getLogger("goal_analytics").info(f"Logging to {log_path}")
    return log_path
