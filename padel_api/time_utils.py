from datetime import UTC, datetime


def utcnow_naive():
    """Current UTC time without tzinfo, as stored in DB timestamp columns."""
    return datetime.now(UTC).replace(tzinfo=None)


def isoformat_or_none(value):
    return value.isoformat() if value else None
