from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pandas as pd

from gust_watchdog.risk_analysis import (
    attach_gust_flags,
    check_weather_for_the_day,
    daytime_window,
    find_max_wind_gust,
    summarize_gust_hours,
)

UTC = ZoneInfo("UTC")
DAY_START = datetime(2026, 10, 18, tzinfo=UTC)


def test_daytime_window_starts_at_midnight():
    start, end = daytime_window(datetime(2026, 10, 18, 14, 37, 12, tzinfo=UTC))
    assert start == DAY_START
    assert end == DAY_START + timedelta(hours=19)


def test_scenario_mixed_gusts(make_forecast):
    df = make_forecast([("08:00", 12.0), ("11:00", 16.5), ("14:00", 20.1), ("21:00", 30.0)])
    exceeds, gusts = check_weather_for_the_day(df, 15.0, DAY_START)
    assert exceeds is True
    assert list(gusts["Wind Gust (m/s)"]) == [16.5, 20.1]
    assert [t.hour for t in gusts["Time"]] == [11, 14]
    assert find_max_wind_gust(gusts) == 20.1


def test_all_below_threshold(make_forecast):
    df = make_forecast([("06:00", 3.0), ("09:00", 14.9), ("12:00", 15.0)])
    exceeds, gusts = check_weather_for_the_day(df, 15.0, DAY_START)
    assert exceeds is False
    assert gusts.empty
    assert find_max_wind_gust(gusts) == 0.0


def test_threshold_is_strict(make_forecast):
    df = make_forecast([("10:00", 15.0)])
    assert check_weather_for_the_day(df, 15.0, DAY_START)[0] is False
    assert check_weather_for_the_day(df, 14.99, DAY_START)[0] is True


def test_window_is_half_open(make_forecast):
    df = make_forecast([("00:00", 20.0), ("19:00", 25.0)])
    exceeds, gusts = check_weather_for_the_day(df, 15.0, DAY_START)
    assert exceeds is True
    assert list(gusts["Wind Gust (m/s)"]) == [20.0]


def test_just_before_window_end_is_included(make_forecast):
    df = make_forecast([("18:59", 18.0)])
    assert check_weather_for_the_day(df, 15.0, DAY_START)[0] is True


def test_other_days_are_ignored(make_forecast):
    yesterday = make_forecast([("12:00", 40.0)], day=datetime(2026, 10, 17))
    tomorrow = make_forecast([("12:00", 40.0)], day=datetime(2026, 10, 19))
    df = pd.concat([yesterday, tomorrow], ignore_index=True)
    exceeds, gusts = check_weather_for_the_day(df, 15.0, DAY_START)
    assert exceeds is False
    assert gusts.empty


def test_run_later_in_day_uses_same_window(make_forecast):
    df = make_forecast([("11:00", 16.5), ("14:00", 20.1)])
    now = DAY_START + timedelta(hours=9, minutes=3)
    exceeds, gusts = check_weather_for_the_day(df, 15.0, now)
    assert exceeds is True
    assert len(gusts) == 2


def test_empty_or_missing_input():
    for df in (None, pd.DataFrame()):
        exceeds, gusts = check_weather_for_the_day(df, 15.0, DAY_START)
        assert exceeds is False
        assert gusts.empty
        assert find_max_wind_gust(gusts) == 0.0
    assert find_max_wind_gust(None) == 0.0


def test_local_window_in_other_zone(make_forecast):
    berlin = ZoneInfo("Europe/Berlin")
    # 20:00 Berlin is 18:00 UTC; outside the Berlin daytime window
    df = make_forecast([("09:00", 17.0), ("20:00", 22.0)], tz=berlin)
    now = datetime(2026, 10, 18, 1, 0, tzinfo=berlin)
    exceeds, gusts = check_weather_for_the_day(df, 15.0, now)
    assert exceeds is True
    assert list(gusts["Wind Gust (m/s)"]) == [17.0]


def test_naive_now_takes_forecast_zone(make_forecast):
    df = make_forecast([("11:00", 16.5)])
    exceeds, _ = check_weather_for_the_day(df, 15.0, datetime(2026, 10, 18, 8, 0))
    assert exceeds is True


def test_attach_gust_flags_columns(make_forecast):
    df = make_forecast([("08:00", 12.0), ("11:00", 16.5), ("21:00", 30.0)])
    flagged = attach_gust_flags(df, 15.0, DAY_START)
    assert list(flagged["in_window"]) == [True, True, False]
    assert list(flagged["gust_risk"]) == [False, True, True]
    assert list(flagged["any_risk"]) == [False, True, False]
    assert (flagged["wind_threshold"] == 15.0).all()
    assert "in_window" not in df.columns


def test_summarize_gust_hours_lists_points(make_forecast):
    df = make_forecast([("11:00", 16.5), ("14:00", 20.1)])
    hours = summarize_gust_hours(df)
    assert [(h.time.strftime("%H:%M"), h.gust) for h in hours] == [("11:00", 16.5), ("14:00", 20.1)]


def test_summarize_gust_hours_collapses_after_six(make_forecast):
    six = make_forecast([(f"{h:02d}:00", 20.0) for h in range(0, 18, 3)])
    seven = make_forecast([(f"{h:02d}:00", 20.0) for h in range(0, 19, 3)])
    assert len(summarize_gust_hours(six)) == 6
    assert summarize_gust_hours(seven) is None
