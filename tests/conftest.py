from __future__ import annotations

import pytest

from app.application.use_cases.create_booking import CreateBookingUseCase
from app.domain.entities.booking import CandidateEvent
from app.infrastructure.calendar.mock_calendar import MockCalendar
from app.infrastructure.store.memory_store import MemoryBookingStore
from tests.helpers import interval


@pytest.fixture
def candidate() -> CandidateEvent:
    return CandidateEvent(
        interval=interval((10, 0), (10, 30), "UTC"),
        title="Consultation",
        description="Initial call",
        owner_identity="owner@example.com",
    )


@pytest.fixture
def store() -> MemoryBookingStore:
    return MemoryBookingStore()


@pytest.fixture
def calendar() -> MockCalendar:
    return MockCalendar()


@pytest.fixture
def booking_use_case(calendar: MockCalendar, store: MemoryBookingStore) -> CreateBookingUseCase:
    return CreateBookingUseCase(calendar=calendar, store=store)
