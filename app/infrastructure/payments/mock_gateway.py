from __future__ import annotations

import base64
import json
import logging
from typing import Any

from app.application.ports.payment_gateway import PaymentGatewayPort


class MockPaymentGateway(PaymentGatewayPort):
    """In-process gateway: every initiated order succeeds when its status is queried."""

    def __init__(self, pay_page_url: str = "https://mock-gateway.local/pay") -> None:
        self._pay_page_url = pay_page_url
        self._orders: dict[str, dict[str, Any]] = {}
        self._logger = logging.getLogger(__name__)

    def initiate(self, encoded_payload: str, checksum: str) -> str:
        payload = json.loads(base64.b64decode(encoded_payload))
        order_id = payload["merchantTransactionId"]
        self._orders[order_id] = payload
        self._logger.info("Mock payment initiated", extra={"order_id": order_id})
        return f"{self._pay_page_url}/{order_id}"

    def check_status(self, status_path: str, checksum: str) -> dict[str, Any]:
        order_id = status_path.rstrip("/").rsplit("/", 1)[-1]
        if order_id not in self._orders:
            return {"success": False, "code": "PAYMENT_ERROR", "message": "Unknown transaction"}
        return {
            "success": True,
            "code": "PAYMENT_SUCCESS",
            "data": {"merchantTransactionId": order_id, "amount": self._orders[order_id]["amount"]},
        }
