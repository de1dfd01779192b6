"""``clinic-billing`` console script."""

import logging
import sys

from clinic_billing.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging():
    """Send clinic_billing logs to stdout at ``settings.log_level``."""
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def main():
    setup_logging()

    # Imported late so logging is configured before command modules load.
    from clinic_billing.cli.commands import app

    app()


if __name__ == "__main__":
    main()
