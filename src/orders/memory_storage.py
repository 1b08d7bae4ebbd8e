# This file provides an in-process order storage with the same contract as the database backend.
# It exists so services, routers, and property tests can run without PostgreSQL.
# Timestamps are issued strictly increasing so newest-first ordering and updated_at advances are deterministic.
# Reads and writes hand out deep copies so callers cannot mutate stored records.

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime, timedelta
from itertools import count

from src.orders.constants import SEARCHABLE_FIELDS
from src.orders.errors import OrderNotFoundError
from src.orders.models import Order, OrderCreate, OrderStats, OrderUpdate, User
from src.orders.stats import aggregate_stats

_TICK = timedelta(microseconds=1)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _newest_first(orders: Iterable[Order]) -> list[Order]:
    ordered = sorted(orders, key=lambda order: (order.created_at, order.id), reverse=True)
    return [order.model_copy(deep=True) for order in ordered]


def matches_search(order: Order, search: str) -> bool:
    # Same folding as Postgres ILIKE, so "ss" never matches "ß".
    needle = search.lower()
    return any(needle in str(getattr(order, field)).lower() for field in SEARCHABLE_FIELDS)


class InMemoryOrderStorage:
    """Dictionary-backed order storage for tests and local runs."""

    def __init__(
        self,
        *,
        users: Iterable[User] = (),
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._orders: dict[int, Order] = {}
        self._users: dict[str, User] = {user.username: user for user in users}
        self._ids = count(1)
        self._clock = clock
        self._last_timestamp: datetime | None = None

    def _now(self) -> datetime:
        now = self._clock()
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + _TICK
        self._last_timestamp = now
        return now

    def get_user_by_username(self, username: str) -> User | None:
        user = self._users.get(username)
        return user.model_copy() if user is not None else None

    def get_orders(self, search: str | None = None) -> list[Order]:
        orders: Iterable[Order] = self._orders.values()
        if search:
            orders = [order for order in orders if matches_search(order, search)]
        return _newest_first(orders)

    def get_orders_by_dni(self, dni: str) -> list[Order]:
        return _newest_first(order for order in self._orders.values() if order.client_dni == dni)

    def get_order(self, order_id: int) -> Order | None:
        order = self._orders.get(order_id)
        return order.model_copy(deep=True) if order is not None else None

    def create_order(self, fields: OrderCreate) -> Order:
        timestamp = self._now()
        order = Order(
            id=next(self._ids),
            created_at=timestamp,
            updated_at=timestamp,
            **fields.model_dump(),
        )
        self._orders[order.id] = order
        return order.model_copy(deep=True)

    def update_order(self, order_id: int, changes: OrderUpdate) -> Order:
        current = self._orders.get(order_id)
        if current is None:
            raise OrderNotFoundError(order_id)
        updated = Order.model_validate(
            {**current.model_dump(exclude={"balance"}), **changes.changes(), "updated_at": self._now()}
        )
        self._orders[order_id] = updated
        return updated.model_copy(deep=True)

    def delete_order(self, order_id: int) -> bool:
        return self._orders.pop(order_id, None) is not None

    def get_stats(self) -> OrderStats:
        return aggregate_stats(self._orders.values())
