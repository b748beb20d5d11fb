# src/smokes_hub/db/time.py
"""Clock helpers shared by models, services and the error envelope."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Timezone-aware current UTC time, used for created/updated/deleted stamps."""
    return datetime.now(UTC)


def isoformat_z(moment: datetime | None = None) -> str:
    """Render ``moment`` (default: now) as ISO-8601 with milliseconds and a ``Z`` suffix."""
    moment = moment or utcnow()
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
