from abc import ABC, abstractmethod

from app.domain.entities.payment_order import PaymentOrder, PaymentState


class PaymentOrderStorePort(ABC):
    @abstractmethod
    def add(self, order: PaymentOrder) -> None:
        """Store a new order. Raises ValueError if the order id is already known."""
        raise NotImplementedError

    @abstractmethod
    def get(self, order_id: str) -> PaymentOrder | None:
        raise NotImplementedError

    @abstractmethod
    def compare_and_set(self, order_id: str, expected: PaymentState, new: PaymentState) -> bool:
        """
        Move the order from `expected` to `new` atomically.
        Returns False when the order is missing or its state is no longer `expected`.
        """
        raise NotImplementedError
