from __future__ import annotations

import logging
from dataclasses import dataclass, field

from app.application.ports.calendar import CalendarPort
from app.domain.entities.booking import BusyInterval
from app.domain.entities.time_interval import TimeInterval, overlaps


@dataclass(frozen=True)
class AvailabilityDecision:
    accepted: bool
    conflicts: list[BusyInterval] = field(default_factory=list)

    @classmethod
    def accept(cls) -> AvailabilityDecision:
        return cls(accepted=True)

    @classmethod
    def reject(cls, conflicts: list[BusyInterval]) -> AvailabilityDecision:
        return cls(accepted=False, conflicts=list(conflicts))


class AvailabilityGate:
    def __init__(self, calendar: CalendarPort) -> None:
        self._calendar = calendar
        self._logger = logging.getLogger(__name__)

    def check(self, candidate: TimeInterval, access_token: str) -> AvailabilityDecision:
        """
        Fetch busy periods covering the candidate window and reject on any overlap.
        AvailabilityQueryFailed from the calendar propagates unchanged.
        """
        busy = self._calendar.query_busy(candidate, access_token)
        conflicts = [period for period in busy if overlaps(period.interval, candidate)]

        if conflicts:
            self._logger.info(
                "Candidate interval rejected",
                extra={"conflicts": len(conflicts), "reason": "overlap"},
            )
            return AvailabilityDecision.reject(conflicts)
        return AvailabilityDecision.accept()
