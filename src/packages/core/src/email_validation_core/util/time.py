"""Time utilities."""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """Format an aware datetime as ISO 8601 with a Z suffix."""
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def utc_now_iso() -> str:
    """Get current UTC time in ISO format."""
    return to_iso(utc_now())
