# src/queue_timer/tasks/duration.py

"""
Duration flags.

`parse_duration` turns flag text such as "-h 1 -m 2 -s 3" into a timedelta.
`format_duration` renders the canonical compact form ("1h2m3s", "1m30s", "3s") used in
console feedback and in the history log.
"""

from __future__ import annotations

import re
from datetime import timedelta

_FLAG_UNITS = {
    "h": 3600,
    "m": 60,
    "s": 1,
}

_INT_RE = re.compile(r"^[+-]?\d+$")


class DurationParseError(ValueError):
    """Raised when duration flag text cannot be turned into a duration."""


def _split_flag(token: str) -> tuple[str, str | None]:
    """'-m' -> ('m', None); '--m=5' -> ('m', '5')."""
    body = token[2:] if token.startswith("--") else token[1:]
    if "=" in body:
        name, value = body.split("=", 1)
        return name, value
    return body, None


def parse_duration(text: str) -> timedelta:
    """
    Parse `-h N`, `-m N`, `-s N` (each optional, default 0) into their sum.

    `--x N`, `-x=N` and `--x=N` are accepted too; repeating a flag overrides the earlier value.
    A zero result is valid here: rejecting it is up to the caller.
    """
    values = {unit: 0 for unit in _FLAG_UNITS}
    tokens = text.split()

    i = 0
    while i < len(tokens):
        token = tokens[i]
        if not token.startswith("-") or token in ("-", "--"):
            raise DurationParseError(f"unexpected argument: {token}")

        name, raw = _split_flag(token)
        if name not in _FLAG_UNITS:
            raise DurationParseError(f"flag provided but not defined: -{name}")

        if raw is None:
            if i + 1 >= len(tokens):
                raise DurationParseError(f"flag needs an argument: -{name}")
            i += 1
            raw = tokens[i]

        if not _INT_RE.match(raw):
            raise DurationParseError(f'invalid value "{raw}" for flag -{name}: parse error')
        values[name] = int(raw)
        i += 1

    if any(v < 0 for v in values.values()):
        raise DurationParseError("negative values not allowed")

    return timedelta(seconds=sum(values[unit] * mult for unit, mult in _FLAG_UNITS.items()))


def round_seconds(value: timedelta | float) -> int:
    """Round to whole seconds, halves away from zero."""
    seconds = value.total_seconds() if isinstance(value, timedelta) else float(value)
    if seconds < 0:
        return -int(-seconds + 0.5)
    return int(seconds + 0.5)


def format_duration(value: timedelta | float) -> str:
    total = round_seconds(value)
    sign = "-" if total < 0 else ""
    total = abs(total)

    hours, rem = divmod(total, 3600)
    minutes, seconds = divmod(rem, 60)

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"
