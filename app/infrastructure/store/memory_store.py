from __future__ import annotations

import threading

from app.application.ports.booking_store import BookingStorePort
from app.application.ports.payment_order_store import PaymentOrderStorePort
from app.domain.entities.booking import BookingRecord
from app.domain.entities.payment_order import PaymentOrder, PaymentState, can_transition


class MemoryBookingStore(BookingStorePort):
    def __init__(self) -> None:
        self._records: list[BookingRecord] = []
        self._lock = threading.Lock()

    @property
    def records(self) -> list[BookingRecord]:
        with self._lock:
            return list(self._records)

    def append(self, record: BookingRecord) -> None:
        with self._lock:
            self._records.append(record)


class MemoryPaymentOrderStore(PaymentOrderStorePort):
    def __init__(self) -> None:
        self._orders: dict[str, PaymentOrder] = {}
        self._lock = threading.Lock()

    def add(self, order: PaymentOrder) -> None:
        with self._lock:
            if order.order_id in self._orders:
                raise ValueError(f"Duplicate payment order id: {order.order_id}")
            self._orders[order.order_id] = order

    def get(self, order_id: str) -> PaymentOrder | None:
        with self._lock:
            return self._orders.get(order_id)

    def compare_and_set(self, order_id: str, expected: PaymentState, new: PaymentState) -> bool:
        with self._lock:
            order = self._orders.get(order_id)
            if order is None or order.state is not expected or not can_transition(expected, new):
                return False
            self._orders[order_id] = order.with_state(new)
            return True
