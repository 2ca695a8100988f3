from datetime import datetime
from zoneinfo import ZoneInfo

import pandas as pd
import pytest

from gust_watchdog.config import Config

UTC = ZoneInfo("UTC")


@pytest.fixture
def config():
    return Config(
        api_key="test-key",
        city="Moscow,RU",
        email_from="alerts@example.com",
        email_to=("a@x.com", "b@x.com"),
        smtp_server="smtp.example.com",
        smtp_port=587,
        smtp_user="alerts",
        smtp_password="secret",
        timezone="UTC",
    )


@pytest.fixture
def make_forecast():
    """Build a forecast frame from (HH:MM, gust) pairs on one day."""
    def _make(points, day=datetime(2026, 10, 18), tz=UTC):
        times = []
        for hhmm, _gust in points:
            h, m = (int(p) for p in hhmm.split(":"))
            times.append(day.replace(hour=h, minute=m, tzinfo=tz))
        return pd.DataFrame(
            {
                "Time": pd.to_datetime(pd.Series(times, dtype="object")).dt.tz_convert(tz),
                "Wind Gust (m/s)": pd.Series([g for _, g in points], dtype="float64"),
                "Wind Speed (m/s)": pd.Series([g / 2 for _, g in points], dtype="float64"),
                "Temperature (°C)": pd.Series([10.0] * len(points), dtype="float64"),
                "Description": pd.Series(["clouds"] * len(points), dtype="object"),
            }
        )
    return _make
