"""URL builder module for the OpenWeatherMap API."""

from urllib.parse import quote

OPENWEATHER_BASE = "https://api.openweathermap.org"


def build_geocoding_url(city: str, api_key: str) -> str:
    """
    Build an OpenWeatherMap Geocoding URL that returns at most one match.

    Args:
        city (str): Place name, optionally qualified ("Moscow,RU")
        api_key (str): OpenWeatherMap API key

    Returns:
        str: The complete direct-geocoding URL
    """
    return (
        f"{OPENWEATHER_BASE}/geo/1.0/direct"
        f"?q={quote(city, safe=',')}"
        "&limit=1"
        f"&appid={api_key}"
    )


def build_forecast_url(lat: float, lon: float, api_key: str) -> str:
    """
    Build a 5 day / 3 hour forecast URL in metric units (°C, m/s).

    Args:
        lat (float): Latitude of the location
        lon (float): Longitude of the location
        api_key (str): OpenWeatherMap API key

    Returns:
        str: The complete forecast URL
    """
    return (
        f"{OPENWEATHER_BASE}/data/2.5/forecast"
        f"?lat={lat:.4f}&lon={lon:.4f}"
        "&units=metric"
        f"&appid={api_key}"
    )
