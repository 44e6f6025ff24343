"""Rate-limit information carried in API response headers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Mapping

__all__ = ["ResetTime", "RateLimitHeaders", "parse_duration"]

_NANOS_PER_UNIT = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,  # micro sign
    "\u03bcs": 1_000,  # greek small letter mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_MAX_NANOS = (1 << 63) - 1
_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)([^\d.]*)")
_INTEGER = re.compile(r"[+-]?\d+")


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``"1h2m3.5s"`` or ``"250ms"``.

    Accepts the units ns, us, µs, ms, s, m and h, an optional sign and
    decimal fractions. Raises ValueError on malformed input.
    """
    rest = text
    negative = False
    if rest[:1] in ("-", "+"):
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise ValueError(f"invalid duration {text!r}")

    total = 0
    pos = 0
    while pos < len(rest):
        match = _COMPONENT.match(rest, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        number, unit = match.groups()
        if not unit:
            raise ValueError(f"missing unit in duration {text!r}")
        if unit not in _NANOS_PER_UNIT:
            raise ValueError(f"unknown unit {unit!r} in duration {text!r}")
        total += int(Decimal(number) * _NANOS_PER_UNIT[unit])
        if total > _MAX_NANOS + (1 if negative else 0):
            raise ValueError(f"invalid duration {text!r}")
        pos = match.end()

    micros = total // 1000
    return timedelta(microseconds=-micros if negative else micros)


class ResetTime(str):
    """A reset interval as sent by the server, e.g. ``"6m0s"``."""

    def time(self) -> datetime:
        """Return the moment the limit resets; an unparsable value means now."""
        try:
            delay = parse_duration(self)
        except ValueError:
            delay = timedelta(0)
        return datetime.now() + delay


def _to_int(value: str) -> int:
    return int(value) if _INTEGER.fullmatch(value) else 0


@dataclass(frozen=True)
class RateLimitHeaders:
    """The ``x-ratelimit-*`` headers of a response."""

    limit_requests: int = 0
    limit_tokens: int = 0
    remaining_requests: int = 0
    remaining_tokens: int = 0
    reset_requests: ResetTime = ResetTime("")
    reset_tokens: ResetTime = ResetTime("")

    @classmethod
    def from_headers(cls, headers: Mapping[str, Any]) -> RateLimitHeaders:
        """Read the limits from a header mapping; names are case-insensitive."""
        lowered = {str(key).lower(): str(value) for key, value in headers.items()}

        def get(name: str) -> str:
            return lowered.get(name, "")

        return cls(
            limit_requests=_to_int(get("x-ratelimit-limit-requests")),
            limit_tokens=_to_int(get("x-ratelimit-limit-tokens")),
            remaining_requests=_to_int(get("x-ratelimit-remaining-requests")),
            remaining_tokens=_to_int(get("x-ratelimit-remaining-tokens")),
            reset_requests=ResetTime(get("x-ratelimit-reset-requests")),
            reset_tokens=ResetTime(get("x-ratelimit-reset-tokens")),
        )