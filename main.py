import logging
import sys

from config import AppConfig, ConfigError
from logging_config import configure_logging

logger = logging.getLogger(__name__)


def main() -> int:
    try:
        config = AppConfig.from_env()
    except ConfigError as e:
        configure_logging()
        logger.error("Invalid configuration: %s", e)
        return 2

    configure_logging(level=config.log_level, force_format=config.log_format)

    from ui.main_window import MainWindow

    logger.info("Starting %s", config.title)
    MainWindow(config).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
