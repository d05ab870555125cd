from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.domain.exceptions import InvalidInterval


@dataclass(frozen=True)
class TimeInterval:
    """Half-open interval [start, end). `zone` is display metadata only."""

    start: datetime
    end: datetime
    zone: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.start, datetime) or not isinstance(self.end, datetime):
            raise InvalidInterval("start and end must be datetimes")
        if self.start.tzinfo is None or self.end.tzinfo is None:
            tz = _resolve_zone(self.zone)
            object.__setattr__(self, "start", _localize(self.start, tz))
            object.__setattr__(self, "end", _localize(self.end, tz))
        if self.start >= self.end:
            raise InvalidInterval(
                f"interval start {self.start.isoformat()} must be before end {self.end.isoformat()}"
            )

    @classmethod
    def from_iso(
        cls,
        start: str,
        end: str,
        zone: str | None = None,
        end_zone: str | None = None,
    ) -> TimeInterval:
        """Each naive timestamp is localised with its own zone; `end_zone` defaults to `zone`."""
        start_dt = parse_instant(start, zone)
        end_dt = parse_instant(end, end_zone or zone)
        return cls(start=start_dt, end=end_dt, zone=zone or end_zone)

    def overlaps(self, other: TimeInterval) -> bool:
        return overlaps(self, other)


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    # Aware datetimes compare as absolute instants regardless of their zone.
    return a.start < b.end and b.start < a.end


def _resolve_zone(zone: str | None) -> ZoneInfo | timezone:
    if not zone:
        return timezone.utc
    try:
        return ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidInterval(f"unknown time zone: {zone}") from e


def _localize(value: datetime, tz: ZoneInfo | timezone) -> datetime:
    if value.tzinfo is not None:
        return value
    return value.replace(tzinfo=tz)


def parse_instant(value: str, zone: str | None = None) -> datetime:
    """Parse an ISO-8601 timestamp; a naive value is localised with `zone` (UTC when absent)."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError, AttributeError) as e:
        raise InvalidInterval(f"unparseable timestamp: {e}") from e
    return _localize(parsed, _resolve_zone(zone))
