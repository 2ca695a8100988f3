"""Exceptions raised by the fetch, compose and send stages of a check cycle."""


class WatchdogError(Exception):
    """Base class for all Gust Watchdog errors"""


class FetchError(WatchdogError):
    """The weather provider could not be reached or answered with an error status"""


class LocationNotFoundError(FetchError, LookupError):
    """The geocoder returned no results for the configured place"""


class DecodeError(WatchdogError):
    """The weather provider answered with a payload we cannot interpret"""


class ComposeError(WatchdogError):
    """An alert template failed to load or render"""


class SendError(WatchdogError):
    """The SMTP server rejected the message or the connection failed"""
