from datetime import UTC, datetime


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored."""
    return datetime.now(UTC).replace(tzinfo=None)


def from_epoch(seconds: int) -> datetime:
    """Naive UTC datetime for a Unix-epoch-seconds value."""
    return datetime.fromtimestamp(seconds, UTC).replace(tzinfo=None)


def to_epoch(value: datetime) -> int:
    """Unix-epoch seconds for a naive UTC datetime."""
    return int(value.replace(tzinfo=UTC).timestamp())
