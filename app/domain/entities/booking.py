from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.domain.entities.time_interval import TimeInterval


@dataclass(frozen=True)
class CandidateEvent:
    interval: TimeInterval
    title: str
    description: str = ""
    owner_identity: str = ""


@dataclass(frozen=True)
class BusyInterval:
    interval: TimeInterval

    def to_dict(self) -> dict[str, str]:
        return {
            "start": self.interval.start.isoformat(),
            "end": self.interval.end.isoformat(),
        }


@dataclass(frozen=True)
class BookingRecord:
    owner_identity: str
    title: str
    description: str
    interval: TimeInterval
    created_at: datetime
