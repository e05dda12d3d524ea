"""Exception types raised by :mod:`jtc`.

Validation findings are data, not exceptions; see :mod:`jtc.findings`.
Only inputs that cannot be validated at all end up here.
"""

from __future__ import annotations

from typing import Optional


class JTCError(Exception):
    """Base class for every error raised by jtc."""


class MalformedSchema(JTCError, ValueError):
    """A typedef document is not valid JSON or not a valid typedef tree."""

    def __init__(self, message: str, *, source: Optional[str] = None, location: str = "") -> None:
        self.source = source
        self.location = location
        detail = message
        if location:
            detail = f"{detail} (at {location})"
        if source:
            detail = f"{source}: {detail}"
        super().__init__(detail)
        self.reason = message


class MalformedJSON(JTCError, ValueError):
    """A data document is not valid JSON."""

    def __init__(self, message: str, *, source: Optional[str] = None) -> None:
        self.source = source
        self.reason = message
        super().__init__(f"{source}: {message}" if source else message)


class ConfigError(JTCError, ValueError):
    """Invalid configuration file or option."""


__all__ = ["ConfigError", "JTCError", "MalformedJSON", "MalformedSchema"]
