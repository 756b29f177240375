from datetime import datetime, timezone


def to_db(value: datetime | None) -> datetime | None:
    """Las columnas DateTime guardan UTC sin zona horaria."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
