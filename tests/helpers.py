from __future__ import annotations

from datetime import datetime, timezone

from app.domain.entities.time_interval import TimeInterval


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2024, 5, 6, hour, minute, tzinfo=timezone.utc)


def interval(start: tuple[int, int], end: tuple[int, int], zone: str | None = None) -> TimeInterval:
    return TimeInterval(start=at(*start), end=at(*end), zone=zone)
