"""Scheduling loop: daily at HH:MM, or every N hours, until asked to stop."""

import logging
import signal
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

from gust_watchdog.alert import check_weather_and_alert
from gust_watchdog.config import Config

logger = logging.getLogger(__name__)

# Restarting shortly after the daily slot still runs that day's check.
CATCHUP_WINDOW = timedelta(minutes=5)

Check = Callable[[Config], object]
Clock = Callable[[], datetime]


def next_send_time(now: datetime, hour: int, minute: int) -> datetime:
    """
    Next occurrence of HH:MM local time.

    Args:
        now (datetime): Current local time
        hour (int): Notification hour (0..23)
        minute (int): Notification minute (0..59)

    Returns:
        datetime: Today at HH:MM, or tomorrow if that moment has already passed
    """
    target = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if now > target:
        target = (now + timedelta(days=1)).replace(hour=hour, minute=minute, second=0, microsecond=0)
    return target


def in_catchup_window(now: datetime, hour: int, minute: int, width: timedelta = CATCHUP_WINDOW) -> bool:
    """True if `now` falls in [today@HH:MM, today@HH:MM + width)."""
    slot = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    return slot <= now < slot + width


def seconds_until(target: datetime, now: datetime) -> float:
    # timestamps, so the wait stays right across DST changes
    return max(0.0, target.timestamp() - now.timestamp())


def _default_clock(config: Config) -> Clock:
    return lambda: datetime.now(config.tz)


def _run_check(check: Check, config: Config) -> None:
    try:
        check(config)
    except Exception:
        logger.exception("Check failed; waiting for the next trigger")


def run_daily(
    config: Config,
    stop_event: threading.Event,
    check: Check = check_weather_and_alert,
    clock: Optional[Clock] = None,
) -> None:
    """Check once a day at the configured time until `stop_event` is set."""
    clock = clock or _default_clock(config)
    hour, minute = config.notification_hour, config.notification_min

    last_target: Optional[datetime] = None
    now = clock()
    if in_catchup_window(now, hour, minute):
        # today's slot is done; the loop must not pick it again
        last_target = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
        _run_check(check, config)
    else:
        logger.info("First check will run at %02d:%02d", hour, minute)

    while not stop_event.is_set():
        now = clock()
        if last_target is not None and now <= last_target:
            # woke a little early; never schedule the same slot twice
            now = last_target + timedelta(seconds=1)
        target = next_send_time(now, hour, minute)
        wait = seconds_until(target, clock())
        logger.info(
            "Next check scheduled for %s (in %s)",
            target.strftime("%Y-%m-%d %H:%M:%S"), timedelta(seconds=round(wait)),
        )
        if stop_event.wait(wait):
            break
        last_target = target
        _run_check(check, config)


def run_interval(
    config: Config,
    stop_event: threading.Event,
    check: Check = check_weather_and_alert,
    clock: Optional[Clock] = None,
) -> None:
    """Check immediately, then every `check_interval_hours`, until `stop_event` is set."""
    clock = clock or _default_clock(config)
    interval = timedelta(hours=config.check_interval_hours)

    while not stop_event.is_set():
        _run_check(check, config)
        target = clock() + interval
        logger.info(
            "Next check scheduled for %s (in %s)",
            target.strftime("%Y-%m-%d %H:%M:%S"), interval,
        )
        if stop_event.wait(interval.total_seconds()):
            break


def run_forever(
    config: Config,
    stop_event: Optional[threading.Event] = None,
    check: Check = check_weather_and_alert,
    clock: Optional[Clock] = None,
) -> None:
    """Run the configured scheduling policy until `stop_event` is set."""
    stop_event = stop_event or threading.Event()
    if config.check_interval_hours:
        run_interval(config, stop_event, check, clock)
    else:
        run_daily(config, stop_event, check, clock)
    logger.info("Scheduler stopped")


def install_signal_handlers(stop_event: threading.Event) -> None:
    """Set `stop_event` on SIGINT/SIGTERM so a long sleep ends immediately."""
    def _handler(signum, _frame):
        logger.info("Received %s, shutting down...", signal.Signals(signum).name)
        stop_event.set()

    signal.signal(signal.SIGINT, _handler)
    signal.signal(signal.SIGTERM, _handler)
