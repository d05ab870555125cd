from __future__ import annotations

from datetime import datetime, timezone

import pytest

from app.application.exceptions import (
    AvailabilityQueryFailed,
    BookingConflict,
    BookingStoreError,
    PartialSuccess,
    Unauthorized,
    UpstreamRejected,
    UpstreamUnavailable,
)
from app.application.ports.booking_store import BookingStorePort
from app.application.ports.calendar import CalendarPort
from app.application.use_cases.create_booking import CreateBookingUseCase
from app.domain.entities.booking import CandidateEvent
from app.infrastructure.calendar.mock_calendar import MockCalendar
from app.infrastructure.store.memory_store import MemoryBookingStore
from tests.helpers import interval


class FailingCalendar(MockCalendar):
    def __init__(self, query_error: Exception | None = None, create_error: Exception | None = None) -> None:
        super().__init__()
        self.query_error = query_error
        self.create_error = create_error
        self.calls: list[str] = []

    def query_busy(self, window, access_token):
        self.calls.append("query")
        if self.query_error:
            raise self.query_error
        return super().query_busy(window, access_token)

    def create_event(self, candidate, access_token):
        self.calls.append("create")
        if self.create_error:
            raise self.create_error
        return super().create_event(candidate, access_token)


class BrokenStore(BookingStorePort):
    def append(self, record):
        raise BookingStoreError("disk full")


def test_missing_token_fails_before_any_call(candidate, store):
    calendar = FailingCalendar()
    use_case = CreateBookingUseCase(calendar=calendar, store=store)
    for token in (None, "", "   "):
        with pytest.raises(Unauthorized):
            use_case.execute(candidate, token)
    assert calendar.calls == []
    assert store.records == []


def test_successful_booking_writes_exactly_one_record(calendar, store, candidate):
    created_at = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)
    use_case = CreateBookingUseCase(calendar=calendar, store=store, clock=lambda: created_at)

    confirmation = use_case.execute(candidate, "token")

    assert confirmation.external_event["id"] == "mock_event_1"
    assert len(store.records) == 1
    record = store.records[0]
    assert record.owner_identity == "owner@example.com"
    assert record.title == "Consultation"
    assert record.description == "Initial call"
    assert record.interval == candidate.interval
    assert record.created_at == created_at
    assert confirmation.record == record


def test_conflict_creates_nothing(store, candidate):
    busy = interval((9, 30), (10, 15))
    calendar = MockCalendar(busy=[busy])
    use_case = CreateBookingUseCase(calendar=calendar, store=store)

    with pytest.raises(BookingConflict) as exc_info:
        use_case.execute(candidate, "token")

    assert [c.interval for c in exc_info.value.conflicts] == [busy]
    assert calendar.events == {}
    assert store.records == []


def test_query_failure_surfaces_as_upstream_unavailable(store, candidate):
    calendar = FailingCalendar(query_error=AvailabilityQueryFailed("401 from calendar"))
    use_case = CreateBookingUseCase(calendar=calendar, store=store)

    with pytest.raises(UpstreamUnavailable):
        use_case.execute(candidate, "token")

    assert calendar.calls == ["query"]
    assert store.records == []


def test_calendar_rejection_writes_no_record(store, candidate):
    calendar = FailingCalendar(create_error=UpstreamRejected({"error": {"code": 403}}, status_code=403))
    use_case = CreateBookingUseCase(calendar=calendar, store=store)

    with pytest.raises(UpstreamRejected) as exc_info:
        use_case.execute(candidate, "token")

    assert exc_info.value.details == {"error": {"code": 403}}
    assert calendar.calls == ["query", "create"]
    assert store.records == []


def test_calendar_timeout_on_create_writes_no_record(store, candidate):
    calendar = FailingCalendar(create_error=UpstreamUnavailable("timed out"))
    use_case = CreateBookingUseCase(calendar=calendar, store=store)

    with pytest.raises(UpstreamUnavailable):
        use_case.execute(candidate, "token")
    assert store.records == []


def test_store_failure_after_create_is_partial_success(calendar, candidate):
    use_case = CreateBookingUseCase(calendar=calendar, store=BrokenStore())

    with pytest.raises(PartialSuccess) as exc_info:
        use_case.execute(candidate, "token")

    assert exc_info.value.external_event["id"] == "mock_event_1"
    assert "mock_event_1" in calendar.events


def test_second_booking_of_same_slot_conflicts(booking_use_case, store, candidate):
    booking_use_case.execute(candidate, "token")
    with pytest.raises(BookingConflict):
        booking_use_case.execute(candidate, "token")
    assert len(store.records) == 1


class StaleCalendar(CalendarPort):
    """Answers every busy query with the same empty snapshot, like two callers racing."""

    def __init__(self) -> None:
        self.created: list[CandidateEvent] = []

    def query_busy(self, window, access_token):
        return []

    def create_event(self, candidate, access_token):
        self.created.append(candidate)
        return {"id": f"evt_{len(self.created)}"}


def test_check_then_create_is_not_atomic(store, candidate):
    # Both requests pass the check before either event is visible; this
    # service does not exclude them and relies on the calendar authority.
    calendar = StaleCalendar()
    use_case = CreateBookingUseCase(calendar=calendar, store=store)

    use_case.execute(candidate, "token")
    use_case.execute(candidate, "token")

    assert len(calendar.created) == 2
    assert len(store.records) == 2
