"""Validation of inbound lock/unlock parameters."""

from __future__ import annotations

import datetime as dt
import re
from decimal import Decimal
from typing import Optional, Tuple

from .errors import ValidationError


_NANOS_PER_UNIT = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_UNIT_PATTERN = "|".join(sorted((re.escape(u) for u in _NANOS_PER_UNIT), key=len, reverse=True))
_NUMBER_PATTERN = r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)"
_COMPONENT_RE = re.compile(rf"({_NUMBER_PATTERN})({_UNIT_PATTERN})")
_DURATION_RE = re.compile(rf"^([+-]?)((?:{_NUMBER_PATTERN}(?:{_UNIT_PATTERN}))+)$")

MIN_TTL = dt.timedelta(milliseconds=1)
# durations are int64 nanoseconds on the wire
MAX_DURATION_NS = (1 << 63) - 1


def parse_duration(text: str) -> dt.timedelta:
    """Parse a duration literal such as ``"1s"``, ``"500ms"`` or ``"1h30m"``.

    Follows the usual Go duration grammar: an optional sign followed by one or
    more decimal numbers each with a unit suffix. A bare ``"0"`` is zero.
    """
    if not isinstance(text, str):
        raise ValidationError("ttl", f"invalid duration {text!r}")
    if text in ("0", "+0", "-0"):
        return dt.timedelta(0)
    match = _DURATION_RE.fullmatch(text)
    if not match:
        raise ValidationError("ttl", f"invalid duration {text!r}")

    sign, body = match.groups()
    total_ns = Decimal(0)
    for number, unit in _COMPONENT_RE.findall(body):
        total_ns += Decimal(number) * _NANOS_PER_UNIT[unit]

    if total_ns > MAX_DURATION_NS:
        raise ValidationError("ttl", f"invalid duration {text!r}")

    micros = int(total_ns) // 1_000
    if sign == "-":
        micros = -micros
    try:
        return dt.timedelta(microseconds=micros)
    except OverflowError as exc:
        raise ValidationError("ttl", f"invalid duration {text!r}") from exc


def _require(field: str, value: Optional[str]) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(field, f"{field} is required")
    return str(value)


def validate_ttl(ttl: dt.timedelta) -> dt.timedelta:
    if ttl < MIN_TTL:
        raise ValidationError("ttl", "ttl must be a positive duration of at least 1ms")
    return ttl


def validate_lock_params(
    target: Optional[str], user: Optional[str], ttl: Optional[str]
) -> Tuple[str, str, dt.timedelta]:
    target, user = validate_owner_params(target, user)
    duration = validate_ttl(parse_duration(_require("ttl", ttl)))
    return target, user, duration


def validate_owner_params(target: Optional[str], user: Optional[str]) -> Tuple[str, str]:
    """Check the target and owner shared by lock and unlock requests."""
    return _require("target", target), _require("user", user)


def validate_unlock_params(target: Optional[str], user: Optional[str]) -> Tuple[str, str]:
    return validate_owner_params(target, user)
