from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from app.application.exceptions import InitiationFailed, PaymentGatewayError, ReconciliationFailed
from app.application.ports.payment_gateway import PaymentGatewayPort
from app.application.ports.payment_order_store import PaymentOrderStorePort
from app.application.utils.checksum import ChecksumSigner, encode_payload
from app.domain.entities.payment_order import PaymentOrder, PaymentState

PAY_ROUTE = "/pg/v1/pay"
STATUS_ROUTE_TEMPLATE = "/pg/v1/status/{merchant_id}/{order_id}"
SUCCESS_CODE = "PAYMENT_SUCCESS"


@dataclass(frozen=True)
class PaymentInitiation:
    order_id: str
    redirect_url: str


@dataclass(frozen=True)
class RedirectDecision:
    order_id: str
    outcome: PaymentState
    redirect_url: str


def is_valid_order_id(order_id: str) -> bool:
    """Order ids are canonical uuid strings; anything else never reaches the status path."""
    try:
        return str(uuid.UUID(order_id)) == order_id
    except (TypeError, ValueError, AttributeError):
        return False


def to_minor_units(amount_major_units: Any) -> int:
    """Major to minor units (x100). Only exact for currencies with two minor-unit digits."""
    try:
        amount = Decimal(str(amount_major_units))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid amount: {amount_major_units!r}") from e
    if not amount.is_finite() or amount <= 0:
        raise ValueError("Amount must be a positive number")
    minor = amount * 100
    if minor != minor.to_integral_value():
        raise ValueError("Amount has more than two decimal places")
    return int(minor)


class PaymentOrderUseCase:
    def __init__(
        self,
        gateway: PaymentGatewayPort,
        signer: ChecksumSigner,
        store: PaymentOrderStorePort,
        merchant_id: str,
        redirect_url: str,
        success_url: str,
        failure_url: str,
        order_id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._gateway = gateway
        self._signer = signer
        self._store = store
        self._merchant_id = merchant_id
        self._redirect_url = redirect_url.rstrip("/")
        self._success_url = success_url
        self._failure_url = failure_url
        self._order_id_factory = order_id_factory or (lambda: str(uuid.uuid4()))
        self._logger = logging.getLogger(__name__)

    def initiate(self, owner_name: str, phone: str, amount_major_units: Any) -> PaymentInitiation:
        amount_minor = to_minor_units(amount_major_units)
        order = PaymentOrder(
            order_id=self._order_id_factory(),
            owner_name=owner_name,
            phone=phone,
            amount_minor_units=amount_minor,
        )
        self._store.add(order)

        payload = {
            "merchantId": self._merchant_id,
            "merchantUserId": owner_name,
            "mobileNumber": phone,
            "amount": amount_minor,
            "merchantTransactionId": order.order_id,
            "redirectUrl": f"{self._redirect_url}/?id={order.order_id}",
            "redirectMode": "POST",
            "paymentInstrument": {"type": "PAY_PAGE"},
        }
        encoded = encode_payload(payload)
        checksum = self._signer.sign(encoded, PAY_ROUTE)

        try:
            redirect_url = self._gateway.initiate(encoded, checksum)
        except PaymentGatewayError as e:
            self._logger.error(
                "Payment initiation failed",
                extra={"order_id": order.order_id, "error": str(e)},
            )
            raise InitiationFailed(f"Failed to initiate payment {order.order_id}") from e

        self._store.compare_and_set(order.order_id, PaymentState.INITIATED, PaymentState.AWAITING_GATEWAY_RESULT)
        self._logger.info("Payment initiated", extra={"order_id": order.order_id})
        return PaymentInitiation(order_id=order.order_id, redirect_url=redirect_url)

    def reconcile(self, order_id: str) -> RedirectDecision:
        """
        Resolve the order's outcome against the gateway. Never raises: any failure
        to obtain a success verdict yields the failure redirect.
        """
        if not is_valid_order_id(order_id):
            self._logger.warning("Rejected malformed payment order id", extra={"order_id": order_id[:64]})
            return self._decision(order_id, PaymentState.FAILED)

        order = self._store.get(order_id)
        if order is not None and order.state.is_terminal:
            return self._decision(order_id, order.state)

        try:
            outcome = self._fetch_outcome(order_id)
        except ReconciliationFailed as e:
            self._logger.error("Payment status check failed", extra={"order_id": order_id, "error": str(e)})
            outcome = PaymentState.FAILED

        if order is None:
            self._logger.warning("Reconciling unknown payment order", extra={"order_id": order_id})
            return self._decision(order_id, outcome)

        if not self._store.compare_and_set(order_id, order.state, outcome):
            # Another reconciliation owns the transition; report what it stored.
            current = self._store.get(order_id)
            if current is not None and current.state.is_terminal:
                return self._decision(order_id, current.state)
            if current is not None:
                self._store.compare_and_set(order_id, current.state, outcome)

        self._logger.info("Payment reconciled", extra={"order_id": order_id, "status": outcome.value})
        return self._decision(order_id, outcome)

    def _fetch_outcome(self, order_id: str) -> PaymentState:
        status_path = STATUS_ROUTE_TEMPLATE.format(merchant_id=self._merchant_id, order_id=order_id)
        checksum = self._signer.sign("", status_path)
        try:
            verdict = self._gateway.check_status(status_path, checksum)
        except PaymentGatewayError as e:
            raise ReconciliationFailed(str(e)) from e

        if verdict.get("success") is True and verdict.get("code", SUCCESS_CODE) == SUCCESS_CODE:
            return PaymentState.SUCCEEDED
        self._logger.info(
            "Payment not successful",
            extra={"order_id": order_id, "reason": verdict.get("code")},
        )
        return PaymentState.FAILED

    def _decision(self, order_id: str, outcome: PaymentState) -> RedirectDecision:
        url = self._success_url if outcome is PaymentState.SUCCEEDED else self._failure_url
        return RedirectDecision(order_id=order_id, outcome=outcome, redirect_url=url)
