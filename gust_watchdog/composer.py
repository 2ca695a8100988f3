"""Alert composer: renders the HTML and plain-text email bodies."""

from dataclasses import dataclass
from typing import List, Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError, select_autoescape

from gust_watchdog.errors import ComposeError
from gust_watchdog.Helpers import format_gust
from gust_watchdog.risk_analysis import GustHour

ALERT_SUBJECT = "WARNING: Strong wind gusts today"

HTML_TEMPLATE = "alert.html.j2"
TEXT_TEMPLATE = "alert.txt.j2"


@dataclass(frozen=True)
class EmailContent:
    html: str
    text: str


def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("gust_watchdog", "templates"),
        autoescape=select_autoescape(enabled_extensions=("html.j2",), default_for_string=False),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["gust"] = format_gust
    env.filters["hhmm"] = lambda t: t.strftime("%H:%M")
    return env


def generate_email_bodies(
    max_wind_gust: float,
    wind_gust_threshold: float,
    gust_hours: Optional[List[GustHour]] = None,
    all_day: bool = False,
) -> EmailContent:
    """
    Render both alert bodies from the evaluation result.

    Args:
        max_wind_gust (float): Largest qualifying gust
        wind_gust_threshold (float): Configured threshold
        gust_hours (list of GustHour, optional): Per-point breakdown to list
        all_day (bool): Print a single all-day notice instead of the breakdown

    Returns:
        EmailContent: The HTML body and its plain-text fallback

    Raises:
        ComposeError: If a template cannot be loaded or rendered
    """
    data = {
        "max_wind_gust": max_wind_gust,
        "wind_gust_threshold": wind_gust_threshold,
        "gust_hours": gust_hours or [],
        "all_day": all_day,
    }
    try:
        env = _environment()
        html = env.get_template(HTML_TEMPLATE).render(**data)
        text = env.get_template(TEXT_TEMPLATE).render(**data)
    except (TemplateError, ValueError) as e:
        raise ComposeError(f"Failed to render alert email: {e}") from e
    return EmailContent(html=html, text=text)
