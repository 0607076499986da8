import logging
import sys

from . import ui
from .cli import run_cli

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130  # 128 + SIGINT


def main():
    """Console script entry point: run the CLI and exit with its status."""
    try:
        exit_code = run_cli()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        ui.display_notice("\nOperation cancelled by user")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        logger.exception(f"Unhandled exception: {e}")
        ui.display_error(f"Error: {e}")
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
