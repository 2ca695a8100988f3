#!/usr/bin/env python3
"""
Main module for the Gust Watchdog application.
Checks the daily wind-gust forecast for one city and emails an alert when the threshold is exceeded.
"""

import argparse
import logging
import os
import sys
import threading
from typing import List, Optional

from gust_watchdog.alert import check_weather_and_alert
from gust_watchdog.config import ConfigError, load_config
from gust_watchdog.logging_config import setup_logging
from gust_watchdog.scheduler import install_signal_handlers, run_forever

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gust-watchdog",
        description="Email an alert when today's wind gusts exceed a threshold.",
    )
    parser.add_argument("--once", action="store_true", help="run a single check and exit")
    parser.add_argument("--log-level", default=os.environ.get("LOG_LEVEL", "INFO"))
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the Gust Watchdog application."""
    args = _parse_args(argv)
    setup_logging(args.log_level)
    logger.info("=== Gust Watchdog: starting ===")

    try:
        config = load_config()
    except ConfigError as e:
        logger.critical("Failed to load configuration: %s", e)
        return e.code

    if config.check_interval_hours:
        schedule = f"every {config.check_interval_hours:g} h"
    else:
        schedule = f"daily at {config.notification_hour:02d}:{config.notification_min:02d}"
    logger.info(
        "Configuration loaded: city = %s, gust threshold = %.2f m/s, checks %s",
        config.city, config.wind_gust_threshold, schedule,
    )

    if args.once:
        result = check_weather_and_alert(config)
        return 0 if result.error is None else 1

    stop_event = threading.Event()
    install_signal_handlers(stop_event)
    run_forever(config, stop_event)
    return 0


if __name__ == "__main__":
    sys.exit(main())
