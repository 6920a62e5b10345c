"""Compact duration grammar used for token lifetimes ("15m", "30d", "3600")."""

import logging
import re
from datetime import timedelta

logger = logging.getLogger(__name__)

# Policy default applied to refresh-token lifetimes that cannot be parsed.
DEFAULT_REFRESH_TTL = timedelta(days=30)

_DURATION_RE = re.compile(r"^(\d+)([smhd]?)$")

_UNIT_SECONDS = {
    "": 1,
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
}


class DurationParseError(ValueError):
    """Raised when a duration expression does not match <integer>[s|m|h|d]."""


def parse_duration(expr: str) -> timedelta:
    """
    Parse an integer followed by an optional unit (s, m, h, d).

    A bare integer is a number of seconds. Surrounding whitespace is ignored.
    """
    if not isinstance(expr, str):
        raise DurationParseError(f"Duration must be a string, got {type(expr).__name__}")
    match = _DURATION_RE.match(expr.strip())
    if match is None:
        raise DurationParseError(f"Invalid duration expression: {expr!r}")
    value, unit = match.groups()
    return timedelta(seconds=int(value) * _UNIT_SECONDS[unit])


def refresh_ttl(expr: str) -> timedelta:
    """Resolve the refresh-token lifetime, falling back to DEFAULT_REFRESH_TTL."""
    try:
        return parse_duration(expr)
    except DurationParseError:
        logger.warning(
            "Unparseable refresh token lifetime %r; applying policy default of %s days",
            expr,
            DEFAULT_REFRESH_TTL.days,
        )
        return DEFAULT_REFRESH_TTL
