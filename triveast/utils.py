import uuid
from datetime import UTC, datetime
from email.utils import format_datetime


def utc_now_iso() -> str:
    return datetime.now(tz=UTC).isoformat()


def rfc822(dt: datetime) -> str:
    """RSS pubDate format, always GMT."""
    return format_datetime(dt.astimezone(UTC), usegmt=True)


def new_id() -> str:
    return str(uuid.uuid4())
