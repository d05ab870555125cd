from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from app.application.exceptions import (
    AvailabilityQueryFailed,
    BookingConflict,
    BookingStoreError,
    PartialSuccess,
    Unauthorized,
    UpstreamUnavailable,
)
from app.application.ports.booking_store import BookingStorePort
from app.application.ports.calendar import CalendarPort
from app.application.use_cases.check_availability import AvailabilityGate
from app.domain.entities.booking import BookingRecord, CandidateEvent


@dataclass(frozen=True)
class BookingConfirmation:
    external_event: dict[str, Any]
    record: BookingRecord


class CreateBookingUseCase:
    """
    Check availability, create the event on the calendar, then append the local record.

    The availability check and the create call are not atomic: two callers can both
    pass the check for the same window before either creates its event. The calendar
    authority is the source of truth and no lock is held over it.
    """

    def __init__(
        self,
        calendar: CalendarPort,
        store: BookingStorePort,
        gate: AvailabilityGate | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._calendar = calendar
        self._store = store
        self._gate = gate or AvailabilityGate(calendar)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._logger = logging.getLogger(__name__)

    def execute(self, candidate: CandidateEvent, access_token: str | None) -> BookingConfirmation:
        if not access_token or not access_token.strip():
            raise Unauthorized("Missing calendar access token")

        try:
            decision = self._gate.check(candidate.interval, access_token)
        except AvailabilityQueryFailed as e:
            self._logger.error("Availability query failed", extra={"error": str(e)})
            raise UpstreamUnavailable(str(e)) from e

        if not decision.accepted:
            raise BookingConflict(decision.conflicts)

        # UpstreamRejected / UpstreamUnavailable propagate; nothing is written locally.
        external_event = self._calendar.create_event(candidate, access_token)

        record = BookingRecord(
            owner_identity=candidate.owner_identity,
            title=candidate.title,
            description=candidate.description,
            interval=candidate.interval,
            created_at=self._clock(),
        )
        try:
            self._store.append(record)
        except BookingStoreError as e:
            self._logger.error(
                "Booking record not saved after calendar event creation",
                extra={"event_id": external_event.get("id"), "owner": candidate.owner_identity, "error": str(e)},
            )
            raise PartialSuccess(external_event) from e

        self._logger.info(
            "Booking confirmed",
            extra={"event_id": external_event.get("id"), "owner": candidate.owner_identity},
        )
        return BookingConfirmation(external_event=external_event, record=record)
