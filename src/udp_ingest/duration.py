"""
Go-style duration strings, as used for ``batch-timeout`` in config files.

    "1s", "500ms", "1m30s", "1.5h", "-2s", "0"
"""
import re
from datetime import timedelta
from decimal import Decimal

_NANOS_PER_UNIT = {
    "ns": Decimal(1),
    "us": Decimal(1_000),
    "µs": Decimal(1_000),  # micro sign
    "μs": Decimal(1_000),  # greek mu
    "ms": Decimal(1_000_000),
    "s": Decimal(1_000_000_000),
    "m": Decimal(60_000_000_000),
    "h": Decimal(3_600_000_000_000),
}

_COMPONENT = re.compile(r"([0-9]+(?:\.[0-9]*)?|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)")

# Largest duration an int64 nanosecond count holds, about 2562047h.
_MAX_NANOS = Decimal(2**63 - 1)

_MICROS_PER_SECOND = 1_000_000
_MICROS_PER_MINUTE = 60 * _MICROS_PER_SECOND
_MICROS_PER_HOUR = 60 * _MICROS_PER_MINUTE


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration string into a timedelta.

    Raises ValueError for empty or malformed input. Precision below one
    microsecond is truncated.
    """
    if not value:
        raise ValueError("invalid duration: empty string")

    negative = value[0] == "-"
    body = value[1:] if value[0] in "+-" else value
    if body == "0":
        return timedelta(0)
    if not body:
        raise ValueError(f"invalid duration: {value!r}")

    total_ns = Decimal(0)
    pos = 0
    while pos < len(body):
        match = _COMPONENT.match(body, pos)
        if match is None:
            raise ValueError(f"invalid duration: {value!r}")
        number, unit = match.groups()
        total_ns += Decimal(number) * _NANOS_PER_UNIT[unit]
        pos = match.end()

    if total_ns > _MAX_NANOS:
        raise ValueError(f"invalid duration: {value!r}")

    micros = int(total_ns / 1000)
    return timedelta(microseconds=-micros if negative else micros)


def _with_fraction(amount: int, unit: int) -> str:
    whole, frac = divmod(amount, unit)
    if not frac:
        return str(whole)
    digits = str(frac).rjust(len(str(unit)) - 1, "0").rstrip("0")
    return f"{whole}.{digits}"


def format_duration(value: timedelta) -> str:
    """Compact duration string, e.g. ``1s``, ``1m30s``, ``1h0m0s``, ``250ms``."""
    micros = value // timedelta(microseconds=1)
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < 1000:
        return f"{sign}{micros}µs"
    if micros < _MICROS_PER_SECOND:
        return f"{sign}{_with_fraction(micros, 1000)}ms"

    hours, rest = divmod(micros, _MICROS_PER_HOUR)
    minutes, rest = divmod(rest, _MICROS_PER_MINUTE)
    seconds = _with_fraction(rest, _MICROS_PER_SECOND)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"
