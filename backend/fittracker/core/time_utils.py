import re
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP

# Zero-padded so stored strings sort chronologically
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_HHMM_RE = re.compile(r"([01]\d|2[0-3]):[0-5]\d")


def hhmm_to_time(hhmm: str) -> time:
    """Parse a zero-padded 24h 'HH:MM' string into datetime.time.

    Raises ValueError for anything else, including empty strings.
    """
    if not isinstance(hhmm, str) or not _HHMM_RE.fullmatch(hhmm):
        raise ValueError("Time must be in 'HH:MM' format")
    return datetime.strptime(hhmm, "%H:%M").time()


def parse_workout_date(value: str) -> date:
    """Parse a 'YYYY-MM-DD' string; raises ValueError when malformed."""
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        raise ValueError("Date must be a 'YYYY-MM-DD' string")
    return date.fromisoformat(value)


def parse_workout_datetime(day: str, hhmm: str) -> datetime:
    """Combine a workout's date and time strings into a naive datetime."""
    return datetime.combine(parse_workout_date(day), hhmm_to_time(hhmm))


def start_of_week(d: date, week_start: int) -> date:
    """First day of the week containing `d`.

    `week_start` uses datetime.weekday() numbering (Monday = 0, Sunday = 6).
    """
    return d - timedelta(days=(d.weekday() - week_start) % 7)


def week_bounds(now: datetime, week_start: int) -> tuple[datetime, datetime]:
    """Return (first instant, last instant) of the week containing `now`."""
    first = start_of_week(now.date(), week_start)
    start = datetime.combine(first, time.min)
    end = datetime.combine(first + timedelta(days=6), time.max)
    return start, end


def shift_month(d: date, months: int) -> date:
    """First day of the month `months` away from `d` (negative goes back)."""
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def round_half_up(value: float, places: int = 0) -> float:
    """Round like a person would: 0.05 -> 0.1, 2.5 -> 3.

    Python's round() uses banker's rounding and binary floats, so go
    through Decimal on the shortest repr instead.
    """
    exp = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(exp, rounding=ROUND_HALF_UP))


def local_now(tz_name: str | None = None) -> datetime:
    """Current wall-clock time as a naive datetime in the configured tz.

    - If `tz_name` is 'local' or None: use system local timezone.
    - If `tz_name` is IANA tz name (e.g., 'America/New_York'): use that.
    """
    if tz_name and tz_name != "local":
        from zoneinfo import ZoneInfo
        return datetime.now(ZoneInfo(tz_name)).replace(tzinfo=None)
    return datetime.now()


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (SQLite drops the offset) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
