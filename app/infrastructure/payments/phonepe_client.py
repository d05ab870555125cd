from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.exceptions import PaymentGatewayError
from app.application.ports.payment_gateway import PaymentGatewayPort

PAY_PATH = "/pg/v1/pay"


class PhonePeGateway(PaymentGatewayPort):
    def __init__(
        self,
        merchant_id: str,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._merchant_id = merchant_id
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def initiate(self, encoded_payload: str, checksum: str) -> str:
        headers = {
            "accept": "application/json",
            "Content-Type": "application/json",
            "X-VERIFY": checksum,
        }
        data = self._request("POST", PAY_PATH, headers=headers, json={"request": encoded_payload})

        if not data.get("success"):
            raise PaymentGatewayError(f"Payment initiation declined: {data.get('code')}", details=data)
        try:
            return data["data"]["instrumentResponse"]["redirectInfo"]["url"]
        except (KeyError, TypeError) as e:
            raise PaymentGatewayError("Gateway response missing redirect URL", details=data) from e

    def check_status(self, status_path: str, checksum: str) -> dict[str, Any]:
        headers = {
            "accept": "application/json",
            "Content-Type": "application/json",
            "X-VERIFY": checksum,
            "X-MERCHANT-ID": self._merchant_id,
        }
        data = self._request("GET", status_path, headers=headers)
        self._logger.info("Payment status response", extra={"status": data.get("code")})
        return data

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            resp = self._client.request(method, f"{self._base_url}{path}", **kwargs)
        except httpx.HTTPError as e:
            raise PaymentGatewayError(f"Gateway request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError:
            data = None

        if resp.status_code >= 400:
            self._logger.error(
                "Gateway request rejected",
                extra={"status": resp.status_code, "error": resp.text[:500]},
            )
            raise PaymentGatewayError(f"Gateway returned HTTP {resp.status_code}", details=data)
        if not isinstance(data, dict):
            raise PaymentGatewayError("Gateway returned a non-JSON body")
        return data
