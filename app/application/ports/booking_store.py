from abc import ABC, abstractmethod

from app.domain.entities.booking import BookingRecord


class BookingStorePort(ABC):
    @abstractmethod
    def append(self, record: BookingRecord) -> None:
        """Append a booking record. Raises BookingStoreError on failure."""
        raise NotImplementedError
