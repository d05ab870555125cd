from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class PaymentGatewayPort(ABC):
    @abstractmethod
    def initiate(self, encoded_payload: str, checksum: str) -> str:
        """Submit a signed order. Returns the hosted payment page URL."""
        raise NotImplementedError

    @abstractmethod
    def check_status(self, status_path: str, checksum: str) -> dict[str, Any]:
        """Query the status endpoint at `status_path`. Returns the gateway verdict payload."""
        raise NotImplementedError
