"""Configuration loading from environment variables (and an optional .env file)."""

import logging
import os
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Mapping, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import find_dotenv, load_dotenv

from gust_watchdog.errors import WatchdogError
from gust_watchdog.Helpers import parse_bool, parse_recipients

logger = logging.getLogger(__name__)

DEFAULT_WIND_GUST_THRESHOLD = 15.0  # m/s
DEFAULT_NOTIFICATION_HOUR = 9
DEFAULT_NOTIFICATION_MIN = 0
DEFAULT_SENDER_NAME = "Weather Monitoring System"
LOCALTIME_PATH = "/etc/localtime"


# Error codes and custom exception
class ConfigError(WatchdogError):
    """Custom exception class for configuration errors"""
    SUCCESS = 0
    MISSING_FIELD = 1
    INVALID_VALUE = 2
    GENERAL_ERROR = 3

    def __init__(self, message: str, code: int):
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class Config:
    api_key: str
    city: str
    email_from: str
    email_to: Tuple[str, ...]
    smtp_server: str
    smtp_port: int
    smtp_user: str = ""
    smtp_password: str = ""
    email_from_name: str = DEFAULT_SENDER_NAME
    smtp_debug: bool = False
    wind_gust_threshold: float = DEFAULT_WIND_GUST_THRESHOLD
    notification_hour: int = DEFAULT_NOTIFICATION_HOUR
    notification_min: int = DEFAULT_NOTIFICATION_MIN
    check_interval_hours: Optional[float] = None
    timezone: Optional[str] = None

    @property
    def tz(self) -> tzinfo:
        """Configured zone, or the host's local zone when none is set."""
        if self.timezone:
            return ZoneInfo(self.timezone)
        return host_zone()


def host_zone() -> tzinfo:
    """
    The host's IANA zone, from $TZ or the /etc/localtime link.

    Falls back to the current fixed UTC offset when neither names a zone;
    that offset does not follow DST changes, so set TIMEZONE on such hosts.
    """
    candidates = [os.environ.get("TZ", "").lstrip(":")]
    link = os.path.realpath(LOCALTIME_PATH)
    if "zoneinfo/" in link:
        candidates.append(link.split("zoneinfo/", 1)[1])

    for key in candidates:
        if not key:
            continue
        try:
            return ZoneInfo(key)
        except (ZoneInfoNotFoundError, ValueError):
            logger.debug("Not an IANA zone name: %r", key)
    return datetime.now().astimezone().tzinfo


def _optional_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        logger.warning("Could not parse %s=%r (%s); using default %s", name, raw, e, default)
        return default


def _optional_int_in_range(env: Mapping[str, str], name: str, default: int, upper: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        val = int(raw)
    except ValueError as e:
        logger.warning("Could not parse %s=%r (%s); using default %s", name, raw, e, default)
        return default
    if not 0 <= val < upper:
        logger.warning("%s=%d is outside 0..%d; using default %s", name, val, upper - 1, default)
        return default
    return val


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ConfigError(f"SMTP_PORT must be an integer, got: {raw!r}", ConfigError.INVALID_VALUE)
    if not 0 < port < 65536:
        raise ConfigError(f"SMTP_PORT out of range: {port}", ConfigError.INVALID_VALUE)
    return port


def _parse_interval(raw: str) -> Optional[float]:
    if not raw:
        return None
    try:
        hours = float(raw)
    except ValueError:
        raise ConfigError(f"CHECK_INTERVAL_HOURS must be a number, got: {raw!r}", ConfigError.INVALID_VALUE)
    if hours <= 0:
        raise ConfigError(f"CHECK_INTERVAL_HOURS must be positive, got: {hours}", ConfigError.INVALID_VALUE)
    return hours


def _validate_timezone(raw: str) -> Optional[str]:
    if not raw:
        return None
    try:
        ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigError(f"Unknown TIMEZONE: {raw!r}", ConfigError.INVALID_VALUE)
    return raw


def load_config(env: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> Config:
    """
    Build the process configuration from environment variables.

    Args:
        env (Mapping[str, str], optional): Variables to read instead of os.environ
        dotenv (bool): Whether to load a .env file into os.environ first

    Returns:
        Config: Immutable configuration shared by every check cycle

    Raises:
        ConfigError: If a required field is empty or a typed field is invalid
    """
    if dotenv:
        path = find_dotenv(usecwd=True)
        if path:
            load_dotenv(path)
        else:
            logger.warning(".env file not found, using system environment variables")
    if env is None:
        env = os.environ

    def get(name: str) -> str:
        return env.get(name, "").strip()

    required = {
        "OPENWEATHER_API_KEY": "OpenWeatherMap API key",
        "CITY": "city to check",
        "EMAIL_FROM": "sender address",
        "SMTP_SERVER": "SMTP server",
        "SMTP_PORT": "SMTP port",
    }
    for name, label in required.items():
        if not get(name):
            raise ConfigError(f"Missing {label} ({name})", ConfigError.MISSING_FIELD)

    email_to = parse_recipients(get("EMAIL_TO"))
    if not email_to:
        raise ConfigError("No recipient addresses given (EMAIL_TO)", ConfigError.MISSING_FIELD)

    return Config(
        api_key=get("OPENWEATHER_API_KEY"),
        city=get("CITY"),
        email_from=get("EMAIL_FROM"),
        email_to=tuple(email_to),
        smtp_server=get("SMTP_SERVER"),
        smtp_port=_parse_port(get("SMTP_PORT")),
        smtp_user=get("SMTP_USER"),
        smtp_password=env.get("SMTP_PASSWORD", ""),
        email_from_name=get("EMAIL_FROM_NAME") or DEFAULT_SENDER_NAME,
        smtp_debug=parse_bool(get("SMTP_DEBUG")),
        wind_gust_threshold=_optional_float(env, "WIND_GUST_THRESHOLD", DEFAULT_WIND_GUST_THRESHOLD),
        notification_hour=_optional_int_in_range(env, "NOTIFICATION_HOUR", DEFAULT_NOTIFICATION_HOUR, 24),
        notification_min=_optional_int_in_range(env, "NOTIFICATION_MIN", DEFAULT_NOTIFICATION_MIN, 60),
        check_interval_hours=_parse_interval(get("CHECK_INTERVAL_HOURS")),
        timezone=_validate_timezone(get("TIMEZONE")),
    )
