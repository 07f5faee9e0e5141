"""
Shopfront Package Main Entry Point

Runs the CLI when the package is executed with ``python -m shopfront``.
"""

import logging
import sys

from shopfront.cli.common.error_handler import handle_cli_error
from shopfront.cli.typer_app import app
from shopfront.shared.constants import CLIDefaults

logger = logging.getLogger(__name__)


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Command interrupted by user")
        sys.exit(CLIDefaults.EXIT_INTERRUPTED)
    except SystemExit:
        raise
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, "shopfront-main")
        sys.exit(exit_code)
