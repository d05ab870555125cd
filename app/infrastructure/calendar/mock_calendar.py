from __future__ import annotations

import logging
from typing import Any

from app.application.ports.calendar import CalendarPort
from app.domain.entities.booking import BusyInterval, CandidateEvent
from app.domain.entities.time_interval import TimeInterval, overlaps


class MockCalendar(CalendarPort):
    def __init__(self, busy: list[TimeInterval] | None = None) -> None:
        self._busy: list[TimeInterval] = list(busy or [])
        self._events: dict[str, dict[str, Any]] = {}
        self._logger = logging.getLogger(__name__)

    @property
    def events(self) -> dict[str, dict[str, Any]]:
        return dict(self._events)

    def query_busy(self, window: TimeInterval, access_token: str) -> list[BusyInterval]:
        return [BusyInterval(interval) for interval in self._busy if overlaps(interval, window)]

    def create_event(self, candidate: CandidateEvent, access_token: str) -> dict[str, Any]:
        event_id = f"mock_event_{len(self._events) + 1}"
        interval = candidate.interval
        event = {
            "id": event_id,
            "status": "confirmed",
            "summary": candidate.title,
            "description": candidate.description,
            "start": {"dateTime": interval.start.isoformat(), "timeZone": interval.zone},
            "end": {"dateTime": interval.end.isoformat(), "timeZone": interval.zone},
        }
        self._events[event_id] = event
        self._busy.append(interval)
        self._logger.info(
            "Mock calendar event created",
            extra={"event_id": event_id, "owner": candidate.owner_identity},
        )
        return event
