# bugvisits/utils/wire.py
"""Type coercions for values leaving the API as JSON."""
from datetime import datetime, timezone

WIRE_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def to_utc_naive(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def as_int(value) -> int | None:
    if value is None:
        return None
    return int(value)


def as_datetime(value) -> str | None:
    """Render a datetime (naive values are taken as UTC) in the wire format."""
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return to_utc_naive(value).strftime(WIRE_DATETIME_FORMAT)
