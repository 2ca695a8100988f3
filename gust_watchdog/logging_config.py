"""Global logging setup."""

import logging


def setup_logging(log_level: str = "INFO") -> None:
    """Configure the root logger with a console handler."""
    logger = logging.getLogger()
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)-15s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # requests/urllib3 connection chatter
    logging.getLogger("urllib3").setLevel(logging.WARNING)
