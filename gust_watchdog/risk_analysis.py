"""Risk analysis module for finding today's daytime wind-gust exceedances."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

import pandas as pd

from gust_watchdog.weather import FORECAST_COLUMNS

logger = logging.getLogger(__name__)

DAYTIME_HOURS = 19
MAX_DETAILED_POINTS = 6

GUST_COL = "Wind Gust (m/s)"


@dataclass(frozen=True)
class GustHour:
    time: datetime
    gust: float


def daytime_window(now: datetime) -> Tuple[datetime, datetime]:
    """
    Alert-relevant window for the day containing `now`.

    Args:
        now (datetime): Current local time

    Returns:
        Tuple of (local midnight, local midnight + 19h); the end is exclusive.
    """
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(hours=DAYTIME_HOURS)


def _empty_forecast() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "Time": pd.Series([], dtype="datetime64[ns, UTC]"),
            GUST_COL: pd.Series([], dtype="float64"),
        },
        columns=FORECAST_COLUMNS,
    )


def _localize_now(now: Optional[datetime], forecast_df: pd.DataFrame) -> datetime:
    tz = forecast_df["Time"].dt.tz
    if now is None:
        return datetime.now(tz)
    if now.tzinfo is None:
        return now.replace(tzinfo=tz) if tz is not None else now
    return now


def attach_gust_flags(forecast_df: pd.DataFrame, threshold: float, now: datetime) -> pd.DataFrame:
    """
    Attach the threshold, the daytime-window flag and the gust risk flag.

    Args:
        forecast_df (pd.DataFrame): Forecast points with Time and Wind Gust (m/s)
        threshold (float): Gust threshold, compared strictly (gust > threshold)
        now (datetime): Current local time, selects the day

    Returns:
        pd.DataFrame: Copy of the input with wind_threshold, in_window,
            gust_risk and any_risk columns
    """
    start, end = daytime_window(now)
    out = forecast_df.assign(wind_threshold=threshold)
    out["in_window"] = (out["Time"] >= start) & (out["Time"] < end)
    out["gust_risk"] = out[GUST_COL] > threshold
    out["any_risk"] = out["in_window"] & out["gust_risk"]
    return out


def check_weather_for_the_day(
    forecast_df: Optional[pd.DataFrame],
    threshold: float,
    now: Optional[datetime] = None,
) -> Tuple[bool, pd.DataFrame]:
    """
    Scan today's daytime forecast for gusts above the threshold.

    Args:
        forecast_df (pd.DataFrame): Forecast points in API order, may be None or empty
        threshold (float): Gust threshold
        now (datetime, optional): Current local time; defaults to the clock

    Returns:
        Tuple containing:
            - bool: True if at least one in-window point exceeds the threshold
            - pd.DataFrame: Those points, original order preserved
    """
    if forecast_df is None or forecast_df.empty:
        return False, _empty_forecast()

    now = _localize_now(now, forecast_df)
    flagged = attach_gust_flags(forecast_df, threshold, now)

    for _, r in flagged[flagged["in_window"]].iterrows():
        logger.debug("Forecast for %s: wind gusts %.2f m/s", r["Time"].strftime("%H:%M"), r[GUST_COL])

    gusts = forecast_df[flagged["any_risk"]]
    return not gusts.empty, gusts


def find_max_wind_gust(gusts_df: Optional[pd.DataFrame]) -> float:
    """Largest gust in the qualifying points, 0.0 when there are none."""
    if gusts_df is None or gusts_df.empty:
        return 0.0
    return float(gusts_df[GUST_COL].max())


def summarize_gust_hours(
    gusts_df: pd.DataFrame,
    max_detailed: int = MAX_DETAILED_POINTS,
) -> Optional[List[GustHour]]:
    """
    Per-point breakdown for the alert body.

    Returns None when more than `max_detailed` points qualify; the alert then
    says gusts are expected all day instead of listing every hour.
    """
    if len(gusts_df) > max_detailed:
        return None
    return [
        GustHour(time=r["Time"].to_pydatetime(), gust=float(r[GUST_COL]))
        for _, r in gusts_df.iterrows()
    ]
