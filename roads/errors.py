"""Exceptions raised by the roads client, writer and opener."""

from typing import Optional


class RoadsError(Exception):
    """Base class; the message is what the Error panel displays."""


class NetworkError(RoadsError):
    """Transport failure while talking to Nominatim or Overpass."""


class ServerError(NetworkError):
    """The remote service answered with a non-2xx status."""

    def __init__(self, url: str, status_code: int, reason: Optional[str] = None):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        detail = f" {reason}" if reason else ""
        super().__init__(f"{url} answered HTTP {status_code}{detail}")


class DecodeError(RoadsError):
    """The response body does not have the expected shape."""


class WriteError(RoadsError):
    """The SVG file could not be created or written."""


class OpenerError(RoadsError):
    """The OS open command failed."""
