import logging
import os
from logging.handlers import RotatingFileHandler

from rich.console import Console
from rich.logging import RichHandler

from .config import Settings

LOG_FILE_NAME = "llm-term.log"


def setup_logging(settings: Settings):
    """Set up logging for the application."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO if settings.verbose else logging.WARNING)

    # Console handler (with Rich)
    console = Console(stderr=True)
    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True
    )
    rich_handler.setLevel(logging.INFO)
    root_logger.addHandler(rich_handler)

    # File handler (Rotating)
    try:
        os.makedirs(settings.log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(settings.log_dir, LOG_FILE_NAME),
            maxBytes=10*1024*1024, backupCount=5  # 10 MB per file, 5 backups
        )
    except OSError as e:
        root_logger.warning(f"File logging disabled, cannot write to {settings.log_dir}: {e}")
    else:
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root_logger.addHandler(file_handler)

    # The HTTP stack logs every request at INFO
    for name in ("openai", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logger initialized. Logs will be stored in {settings.log_dir}")
