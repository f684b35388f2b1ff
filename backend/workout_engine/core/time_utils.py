import math
import re

_DIGITS = re.compile(r"[0-9]+")


def parse_duration(text: str | None) -> int | None:
    """
    Convert 'H:MM:SS' or 'M:SS' -> total seconds (int).
    Example: '1:05:30' -> 3930, '45:00' -> 2700

    Two-component values are pure minutes and seconds, so minutes may
    exceed 59 ('75:00' -> 4500). Returns None for anything else.
    """
    if text is None:
        return None
    s = str(text).strip()
    if s == "":
        return None

    parts = s.split(":")
    if len(parts) not in (2, 3):
        return None
    if not all(_DIGITS.fullmatch(p) for p in parts):
        return None

    values = [int(p) for p in parts]
    if len(values) == 3:
        hours, minutes, seconds = values
        if minutes >= 60 or seconds >= 60:
            return None
        return hours * 3600 + minutes * 60 + seconds

    minutes, seconds = values
    if seconds >= 60:
        return None
    return minutes * 60 + seconds


def format_duration(total_seconds: int | float | None) -> str:
    """
    Convert total seconds -> 'H:MM:SS' (one hour or more) or 'M:SS'.
    Example: 3930 -> '1:05:30', 2700 -> '45:00'
    """
    if total_seconds is None or total_seconds < 0:
        return ""
    sec = int(round(total_seconds))
    hours, rem = divmod(sec, 3600)
    minutes, seconds = divmod(rem, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def parse_pace(text: str | None) -> float | None:
    """
    Convert 'M:SS' -> minutes per km (float).
    Example: '4:30' -> 4.5

    A bare number is read as whole minutes ('5' -> 5.0).
    """
    if text is None:
        return None
    s = str(text).strip()
    if s == "":
        return None

    parts = s.split(":")
    if len(parts) == 1:
        value = parse_number(parts[0])
        if value is None or value < 0:
            return None
        return value
    if len(parts) != 2 or not all(_DIGITS.fullmatch(p) for p in parts):
        return None

    minutes, seconds = int(parts[0]), int(parts[1])
    if seconds >= 60:
        return None
    return minutes + seconds / 60


def format_pace(minutes_per_km: float | None) -> str:
    """
    Convert minutes per km -> 'M:SS'.
    Example: 4.5 -> '4:30'. Seconds that round up to 60 carry into minutes.
    """
    if minutes_per_km is None or minutes_per_km <= 0:
        return ""
    total = int(round(minutes_per_km * 60))
    minutes, seconds = divmod(total, 60)
    return f"{minutes}:{seconds:02d}"


def parse_number(text: str | None) -> float | None:
    """Parse a user-typed decimal, accepting a comma as decimal separator."""
    if text is None:
        return None
    s = str(text).strip().replace(",", ".")
    if s == "":
        return None
    try:
        value = float(s)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_count(text: str | None) -> int | None:
    """Parse a non-negative integer count (reps, sets, meters)."""
    if text is None:
        return None
    s = str(text).strip()
    if not _DIGITS.fullmatch(s):
        return None
    return int(s)


def format_number(value: float | int | None) -> str:
    """
    Render a number the way it was typed: no trailing '.0'.
    Example: 10.0 -> '10', 1.5 -> '1.5'
    """
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return f"{float(value):.10g}"
