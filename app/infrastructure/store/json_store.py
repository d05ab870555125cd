from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any

from app.application.exceptions import BookingStoreError
from app.application.ports.booking_store import BookingStorePort
from app.domain.entities.booking import BookingRecord


class JsonBookingStore(BookingStorePort):
    """Append-only JSON Lines file, one booking record per line."""

    def __init__(self, path: str = "./data/bookings.jsonl") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def append(self, record: BookingRecord) -> None:
        line = json.dumps(self._serialize_record(record), ensure_ascii=False)
        try:
            with self._lock:
                with open(self._path, "a", encoding="utf-8") as f:
                    f.write(line + "\n")
                    f.flush()
        except OSError as e:
            raise BookingStoreError(f"Could not append booking record to {self._path}: {e}") from e

    def _serialize_record(self, record: BookingRecord) -> dict[str, Any]:
        """Serialize BookingRecord to dict with ISO string conversion."""
        return {
            "userEmail": record.owner_identity,
            "summary": record.title,
            "description": record.description,
            "start": record.interval.start.isoformat(),
            "end": record.interval.end.isoformat(),
            "timeZone": record.interval.zone,
            "createdAt": record.created_at.isoformat(),
        }
