"""RFC 3339 timestamps covering the full four-digit year range."""

from __future__ import annotations

import re
from dataclasses import dataclass

_NANOS_PER_SECOND = 1_000_000_000
_SECONDS_PER_DAY = 86_400
_RFC3339_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})"
)
_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def _is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def _days_in_month(year: int, month: int) -> int:
    if month == 2 and _is_leap(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def _days_from_civil(year: int, month: int, day: int) -> int:
    year -= month <= 2
    era = year // 400
    yoe = year - era * 400
    doy = (153 * (month + (-3 if month > 2 else 9)) + 2) // 5 + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * 146097 + doe - 719468


def _civil_from_days(days: int) -> tuple[int, int, int]:
    z = days + 719468
    era = z // 146097
    doe = z - era * 146097
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    year = yoe + era * 400
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + (3 if mp < 10 else -9)
    return year + (month <= 2), month, day


@dataclass(frozen=True, order=True)
class Timestamp:
    """An instant as seconds since the Unix epoch plus nanoseconds."""

    seconds: int
    nanos: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.nanos < _NANOS_PER_SECOND:
            raise ValueError(f"nanoseconds out of range: {self.nanos}")

    def isoformat(self) -> str:
        """Format in UTC as RFC 3339, with trailing fraction zeros dropped."""
        days, secs = divmod(self.seconds, _SECONDS_PER_DAY)
        year, month, day = _civil_from_days(days)
        hour, rest = divmod(secs, 3600)
        minute, second = divmod(rest, 60)
        frac = f".{self.nanos:09d}".rstrip("0") if self.nanos else ""
        return (
            f"{year:04d}-{month:02d}-{day:02d}T"
            f"{hour:02d}:{minute:02d}:{second:02d}{frac}Z"
        )

    def __str__(self) -> str:
        return self.isoformat()


def parse_rfc3339(text: str) -> Timestamp:
    """Parse an RFC 3339 time string; raise ValueError if it is malformed."""
    match = _RFC3339_RE.fullmatch(text)
    if not match:
        raise ValueError(f"parsing time {text!r} as RFC 3339: malformed time")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    frac, zone = match.group(7), match.group(8)
    if not 1 <= month <= 12:
        raise ValueError(f"parsing time {text!r}: month out of range")
    if not 1 <= day <= _days_in_month(year, month):
        raise ValueError(f"parsing time {text!r}: day out of range")
    if hour >= 24:
        raise ValueError(f"parsing time {text!r}: hour out of range")
    if minute >= 60:
        raise ValueError(f"parsing time {text!r}: minute out of range")
    if second >= 60:
        raise ValueError(f"parsing time {text!r}: second out of range")
    offset = 0
    if zone != "Z":
        zone_hours, zone_minutes = int(zone[1:3]), int(zone[4:6])
        if zone_hours >= 24 or zone_minutes >= 60:
            raise ValueError(f"parsing time {text!r}: time zone offset out of range")
        offset = (zone_hours * 3600 + zone_minutes * 60) * (-1 if zone[0] == "-" else 1)
    seconds = (
        _days_from_civil(year, month, day) * _SECONDS_PER_DAY
        + hour * 3600
        + minute * 60
        + second
        - offset
    )
    nanos = int(frac[:9].ljust(9, "0")) if frac else 0
    return Timestamp(seconds, nanos)


def date_ranges_overlap(
    start_a: Timestamp, end_a: Timestamp, start_b: Timestamp, end_b: Timestamp
) -> bool:
    """Tell whether two ranges overlap; starts are inclusive, ends exclusive."""
    return start_a < end_b and end_a > start_b