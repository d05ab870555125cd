from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class PaymentState(str, Enum):
    INITIATED = "initiated"
    AWAITING_GATEWAY_RESULT = "awaiting_gateway_result"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (PaymentState.SUCCEEDED, PaymentState.FAILED)


# Terminal states are absorbing.
_ALLOWED_TRANSITIONS: dict[PaymentState, frozenset[PaymentState]] = {
    PaymentState.INITIATED: frozenset(
        {PaymentState.AWAITING_GATEWAY_RESULT, PaymentState.SUCCEEDED, PaymentState.FAILED}
    ),
    PaymentState.AWAITING_GATEWAY_RESULT: frozenset({PaymentState.SUCCEEDED, PaymentState.FAILED}),
    PaymentState.SUCCEEDED: frozenset(),
    PaymentState.FAILED: frozenset(),
}


def can_transition(current: PaymentState, new: PaymentState) -> bool:
    return new in _ALLOWED_TRANSITIONS[current]


@dataclass(frozen=True)
class PaymentOrder:
    order_id: str
    owner_name: str
    phone: str
    amount_minor_units: int
    state: PaymentState = PaymentState.INITIATED

    def with_state(self, state: PaymentState) -> PaymentOrder:
        if not can_transition(self.state, state):
            raise ValueError(f"illegal payment transition {self.state.value} -> {state.value}")
        return replace(self, state=state)
