"""Timezone helpers shared by the time-dependent analyses."""

from __future__ import annotations

from datetime import datetime


def local_now() -> datetime:
    return datetime.now().astimezone()


def as_aware(value: datetime) -> datetime:
    """Naive datetimes are taken to be local time."""
    if value.tzinfo is None:
        return value.astimezone()
    return value
