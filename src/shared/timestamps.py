"""UTC timestamp normalization shared by decoding and domain models."""
from datetime import datetime, UTC

ISO_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
DATE_FORMAT = "%Y-%m-%d"


def normalize_timestamp(value: datetime) -> datetime:
    """
    Normalize a datetime to timezone-aware UTC with whole-second precision.

    Naive values are assumed to already be in UTC, which is how the store
    returns them when the client is not timezone aware.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    else:
        value = value.astimezone(UTC)
    return value.replace(microsecond=0)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with seconds precision and a trailing Z."""
    return normalize_timestamp(value).strftime(ISO_FORMAT)


def utc_date_key(value: datetime) -> str:
    """Calendar date (YYYY-MM-DD) of a timestamp in UTC."""
    return normalize_timestamp(value).strftime(DATE_FORMAT)


def utc_now() -> datetime:
    return normalize_timestamp(datetime.now(UTC))
