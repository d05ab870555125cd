from __future__ import annotations

from typing import Any


class BookingError(RuntimeError):
    """Base class for failures of the booking flow."""
    pass


class Unauthorized(BookingError):
    """Raised when a booking request carries no calendar access token."""
    pass


class AvailabilityQueryFailed(RuntimeError):
    """Raised when the calendar busy query fails (network, auth, malformed window or payload)."""
    pass


class UpstreamUnavailable(BookingError):
    """Raised when the calendar authority cannot be reached or did not answer in time."""
    pass


class BookingConflict(BookingError):
    """Raised when the candidate interval overlaps busy periods on the calendar."""

    def __init__(self, conflicts: list[Any]) -> None:
        super().__init__(f"Time slot not available ({len(conflicts)} conflicting busy periods)")
        self.conflicts = conflicts


class UpstreamRejected(BookingError):
    """Raised when the calendar authority answers event creation with a failure payload."""

    def __init__(self, details: Any, status_code: int | None = None) -> None:
        super().__init__(f"Calendar rejected event creation (status={status_code})")
        self.details = details
        self.status_code = status_code


class BookingStoreError(RuntimeError):
    """Raised by booking stores when a record cannot be appended."""
    pass


class PartialSuccess(BookingError):
    """Raised when the calendar event exists but the local record could not be written."""

    def __init__(self, external_event: dict[str, Any]) -> None:
        super().__init__("Calendar event created but local booking record was not saved")
        self.external_event = external_event


class PaymentError(RuntimeError):
    """Base class for failures of the payment flow."""
    pass


class PaymentGatewayError(PaymentError):
    """Raised by gateway adapters on transport errors, timeouts or failure payloads."""

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.details = details


class InitiationFailed(PaymentError):
    """Raised when the gateway did not accept a payment order."""
    pass


class ReconciliationFailed(PaymentError):
    """Raised when the gateway status for an order cannot be determined."""
    pass
