# This file declares the storage capability set every order backend provides.
# Services and routers depend on this protocol so tests can swap in the in-memory backend.
# Every order returned by any backend is an `Order`, which derives `balance` on read.

from __future__ import annotations

from typing import Protocol

from src.orders.models import Order, OrderCreate, OrderStats, OrderUpdate, User


class OrderStorage(Protocol):
    def get_user_by_username(self, username: str) -> User | None: ...

    def get_orders(self, search: str | None = None) -> list[Order]:
        """Newest first; a non-empty `search` matches any searchable field case-insensitively."""
        ...

    def get_orders_by_dni(self, dni: str) -> list[Order]: ...

    def get_order(self, order_id: int) -> Order | None: ...

    def create_order(self, fields: OrderCreate) -> Order: ...

    def update_order(self, order_id: int, changes: OrderUpdate) -> Order:
        """Apply provided fields and refresh `updated_at`; raise `OrderNotFoundError` if missing."""
        ...

    def delete_order(self, order_id: int) -> bool:
        """Return True when a row was removed."""
        ...

    def get_stats(self) -> OrderStats: ...
