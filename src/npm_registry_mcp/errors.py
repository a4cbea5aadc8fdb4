"""Exceptions raised by the registry client.

Each failure mode of a registry call maps to exactly one exception type so
callers can tell "could not reach the registry" from "registry said no" from
"registry sent something unreadable".
"""

from __future__ import annotations


class RegistryError(Exception):
    """Base class for all registry client failures."""

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message)
        self.url = url


class TransportError(RegistryError):
    """The request could not be sent or completed (DNS, connect, timeout)."""


class UnexpectedStatusError(RegistryError):
    """The registry answered with a status other than 200."""

    def __init__(self, status_code: int, *, url: str) -> None:
        super().__init__(f"npm registry returned HTTP {status_code} for {url}", url=url)
        self.status_code = status_code


class DecodeError(RegistryError):
    """The response body was not JSON of the expected shape."""
