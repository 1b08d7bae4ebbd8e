"""Order storage error types."""

from __future__ import annotations


class OrderNotFoundError(LookupError):
    """Raised when a write targets an order id that has no row."""

    def __init__(self, order_id: int) -> None:
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")
