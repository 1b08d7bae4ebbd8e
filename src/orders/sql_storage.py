# This file implements order storage on PostgreSQL through the shared DatabaseClient.
# It exists so routers and services never embed SQL and always receive balance-bearing `Order` rows.
# Queries are parameterized; table names come from validated config identifiers only.
# Backend errors (SQLAlchemyError) propagate unchanged to the caller; nothing here retries.

from __future__ import annotations

import json
import logging
from typing import Any

from src.common.db import DatabaseClient, validate_identifier
from src.orders.constants import SEARCHABLE_FIELDS
from src.orders.errors import OrderNotFoundError
from src.orders.models import Order, OrderCreate, OrderStats, OrderUpdate, User
from src.orders.stats import StatRow, aggregate_stats

LOGGER = logging.getLogger("orders")

ORDER_COLUMNS: tuple[str, ...] = (
    "id",
    "customer_name",
    "client_dni",
    "phone",
    "device_type",
    "device_model",
    "issue_description",
    "checklist",
    "estimated_cost",
    "deposit",
    "status",
    "created_at",
    "updated_at",
)

# Field name -> column name for everything a caller may set.
WRITABLE_COLUMNS: dict[str, str] = {
    "customer_name": "customer_name",
    "client_dni": "client_dni",
    "phone": "phone",
    "device_type": "device_type",
    "device_model": "device_model",
    "issue_description": "issue_description",
    "checklist": "checklist",
    "estimated_cost": "estimated_cost",
    "deposit": "deposit",
    "status": "status",
}

NEWEST_FIRST = "o.created_at DESC, o.id DESC"


def like_pattern(search: str) -> str:
    """Wrap `search` for a substring ILIKE, matching `%`, `_` and backslash literally."""

    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _bind_value(field: str, value: Any) -> Any:
    if field == "checklist":
        return json.dumps(value)
    return value


def _placeholder(field: str) -> str:
    if field == "checklist":
        return "CAST(:checklist AS JSONB)"
    return f":{field}"


class DatabaseOrderStorage:
    """Order and user queries against the relational store."""

    def __init__(
        self,
        *,
        db: DatabaseClient,
        orders_table: str = "orders",
        users_table: str = "users",
    ) -> None:
        self.db = db
        self.orders_table = validate_identifier(orders_table)
        self.users_table = validate_identifier(users_table)
        self._select_columns = ", ".join(f"o.{column}" for column in ORDER_COLUMNS)
        self._returning_columns = ", ".join(ORDER_COLUMNS)

    def get_user_by_username(self, username: str) -> User | None:
        query = f"""
        SELECT id, username, password
        FROM {self.users_table}
        WHERE username = :username
        LIMIT 1
        """
        row = self.db.fetch_one(query, {"username": username})
        return User.model_validate(row) if row is not None else None

    def get_orders(self, search: str | None = None) -> list[Order]:
        where_sql = "1 = 1"
        params: dict[str, Any] = {}
        if search:
            where_sql = " OR ".join(f"o.{column} ILIKE :pattern" for column in SEARCHABLE_FIELDS)
            params["pattern"] = like_pattern(search)

        query = f"""
        SELECT {self._select_columns}
        FROM {self.orders_table} o
        WHERE {where_sql}
        ORDER BY {NEWEST_FIRST}
        """
        return [Order.model_validate(row) for row in self.db.fetch_all(query, params)]

    def get_orders_by_dni(self, dni: str) -> list[Order]:
        query = f"""
        SELECT {self._select_columns}
        FROM {self.orders_table} o
        WHERE o.client_dni = :dni
        ORDER BY {NEWEST_FIRST}
        """
        return [Order.model_validate(row) for row in self.db.fetch_all(query, {"dni": dni})]

    def get_order(self, order_id: int) -> Order | None:
        query = f"""
        SELECT {self._select_columns}
        FROM {self.orders_table} o
        WHERE o.id = :order_id
        """
        row = self.db.fetch_one(query, {"order_id": order_id})
        return Order.model_validate(row) if row is not None else None

    def create_order(self, fields: OrderCreate) -> Order:
        values = fields.model_dump()
        columns_sql = ", ".join(WRITABLE_COLUMNS[name] for name in values)
        values_sql = ", ".join(_placeholder(name) for name in values)
        params = {name: _bind_value(name, value) for name, value in values.items()}

        query = f"""
        INSERT INTO {self.orders_table} ({columns_sql})
        VALUES ({values_sql})
        RETURNING {self._returning_columns}
        """
        row = self.db.execute_returning(query, params)
        if row is None:
            raise RuntimeError("INSERT ... RETURNING produced no row.")
        order = Order.model_validate(row)
        LOGGER.info("order created id=%s", order.id)
        return order

    def update_order(self, order_id: int, changes: OrderUpdate) -> Order:
        values = changes.changes()
        assignments = [f"{WRITABLE_COLUMNS[name]} = {_placeholder(name)}" for name in values]
        assignments.append("updated_at = NOW()")
        set_sql = ", ".join(assignments)
        params = {name: _bind_value(name, value) for name, value in values.items()}
        params["order_id"] = order_id

        query = f"""
        UPDATE {self.orders_table}
        SET {set_sql}
        WHERE id = :order_id
        RETURNING {self._returning_columns}
        """
        row = self.db.execute_returning(query, params)
        if row is None:
            raise OrderNotFoundError(order_id)
        LOGGER.info("order updated id=%s fields=%s", order_id, ",".join(sorted(values)) or "-")
        return Order.model_validate(row)

    def delete_order(self, order_id: int) -> bool:
        query = f"DELETE FROM {self.orders_table} WHERE id = :order_id"
        deleted = self.db.execute(query, {"order_id": order_id}) > 0
        LOGGER.info("order delete id=%s deleted=%s", order_id, deleted)
        return deleted

    def get_stats(self) -> OrderStats:
        query = f"SELECT status, estimated_cost, deposit FROM {self.orders_table}"
        rows = self.db.fetch_all(query)
        return aggregate_stats(
            StatRow(
                status=str(row["status"]),
                estimated_cost=int(row["estimated_cost"]),
                deposit=int(row["deposit"]),
            )
            for row in rows
        )
