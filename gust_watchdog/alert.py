"""One check cycle: fetch, evaluate, compose and send."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

import requests

from gust_watchdog.composer import ALERT_SUBJECT, generate_email_bodies
from gust_watchdog.config import Config
from gust_watchdog.errors import ComposeError, DecodeError, FetchError, SendError
from gust_watchdog.mailer import send_email
from gust_watchdog.risk_analysis import (
    check_weather_for_the_day,
    find_max_wind_gust,
    summarize_gust_hours,
)
from gust_watchdog.weather import get_weather_forecast

logger = logging.getLogger(__name__)

Sender = Callable[[Config, str, str, str], None]


@dataclass
class CheckResult:
    exceeds: bool = False
    max_gust: float = 0.0
    sent: bool = False
    error: Optional[Exception] = None


def check_weather_and_alert(
    config: Config,
    now: Optional[datetime] = None,
    session: Optional[requests.Session] = None,
    sender: Sender = send_email,
) -> CheckResult:
    """
    Run one check cycle and send an alert if today's gusts exceed the threshold.

    Every failure is logged and reported in the result; nothing is raised, so
    the scheduler always reaches its next trigger.
    """
    logger.info("Starting weather check for %s...", config.city)
    result = CheckResult()

    try:
        _location, forecast = get_weather_forecast(config, session)
    except (FetchError, DecodeError) as e:
        logger.error("Failed to get weather data: %s", e)
        result.error = e
        return result

    if forecast.empty:
        logger.warning("No weather data in API response")
        return result

    if now is None:
        now = datetime.now(config.tz)
    exceeds, gusts = check_weather_for_the_day(forecast, config.wind_gust_threshold, now)
    result.exceeds = exceeds

    if not exceeds:
        logger.info("Wind gusts stay below %.2f m/s for the day, no alert needed", config.wind_gust_threshold)
        return result

    result.max_gust = find_max_wind_gust(gusts)
    logger.info(
        "Wind gusts up to %.2f m/s exceed the threshold (%d points), sending alert...",
        result.max_gust, len(gusts),
    )

    gust_hours = summarize_gust_hours(gusts)
    try:
        content = generate_email_bodies(
            result.max_gust,
            config.wind_gust_threshold,
            gust_hours=gust_hours,
            all_day=gust_hours is None,
        )
    except ComposeError as e:
        logger.error("Failed to compose alert email: %s", e)
        result.error = e
        return result

    try:
        sender(config, ALERT_SUBJECT, content.html, content.text)
    except SendError as e:
        logger.error("Failed to send alert: %s", e)
        result.error = e
        return result

    result.sent = True
    logger.info("Alert sent to %d recipient(s)", len(config.email_to))
    return result
