from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from app.domain.entities.booking import BusyInterval, CandidateEvent
from app.domain.entities.time_interval import TimeInterval


class CalendarPort(ABC):
    @abstractmethod
    def query_busy(self, window: TimeInterval, access_token: str) -> list[BusyInterval]:
        """
        Return every busy period of the default calendar inside `window`.
        Raises AvailabilityQueryFailed when the authority cannot answer.
        """
        raise NotImplementedError

    @abstractmethod
    def create_event(self, candidate: CandidateEvent, access_token: str) -> dict[str, Any]:
        """
        Create the event and return its canonical representation.
        Raises UpstreamRejected on a failure payload, UpstreamUnavailable on transport errors.
        """
        raise NotImplementedError
