"""
Gust Watchdog Package
Daily wind-gust forecast check with email alerts.
"""

from .config import Config, ConfigError, load_config
from .weather import get_weather_forecast
from .risk_analysis import (
    check_weather_for_the_day,
    find_max_wind_gust,
    summarize_gust_hours
)
from .composer import generate_email_bodies
from .mailer import send_email
from .alert import check_weather_and_alert
from .scheduler import run_forever

__all__ = [
    'Config',
    'ConfigError',
    'load_config',
    'get_weather_forecast',
    'check_weather_for_the_day',
    'find_max_wind_gust',
    'summarize_gust_hours',
    'generate_email_bodies',
    'send_email',
    'check_weather_and_alert',
    'run_forever'
]
