"""
Unit tests for the PostgreSQL order storage.
A recording fake stands in for DatabaseClient so SQL shape, bound parameters, and row mapping can be checked offline.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import pytest

from src.orders.errors import OrderNotFoundError
from src.orders.models import OrderUpdate
from src.orders.sql_storage import DatabaseOrderStorage, like_pattern
from tests.api.support import order_fields

CREATED = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)


def _row(**overrides: Any) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": 1,
        "customer_name": "Lucia Fernandez",
        "client_dni": "30111222",
        "phone": "1155550000",
        "device_type": "Smartphone",
        "device_model": "Galaxy S21",
        "issue_description": "Cracked screen",
        "checklist": {
            "powers_on": True,
            "charges": False,
            "has_audio": False,
            "screen_intact": False,
            "touch_works": False,
            "buttons_work": False,
        },
        "estimated_cost": 500,
        "deposit": 200,
        "status": "Recibido",
        "created_at": CREATED,
        "updated_at": CREATED,
    }
    row.update(overrides)
    return row


class RecordingDBClient:
    def __init__(
        self,
        *,
        rows: list[dict[str, Any]] | None = None,
        returning: dict[str, Any] | None = None,
        rowcount: int = 0,
    ) -> None:
        self.rows = rows or []
        self.returning = returning
        self.rowcount = rowcount
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def _record(self, query: str, params: Mapping[str, Any] | None) -> None:
        self.calls.append((" ".join(query.split()), dict(params or {})))

    def fetch_all(self, query: str, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        self._record(query, params)
        return self.rows

    def fetch_one(self, query: str, params: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        self._record(query, params)
        return self.rows[0] if self.rows else None

    def execute(self, query: str, params: Mapping[str, Any] | None = None) -> int:
        self._record(query, params)
        return self.rowcount

    def execute_returning(
        self, query: str, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any] | None:
        self._record(query, params)
        return self.returning


def _storage(db: RecordingDBClient) -> DatabaseOrderStorage:
    return DatabaseOrderStorage(db=db)  # type: ignore[arg-type]


def test_like_pattern_escapes_wildcards() -> None:
    assert like_pattern("abc") == "%abc%"
    assert like_pattern("50%") == "%50\\%%"
    assert like_pattern("a_b") == "%a\\_b%"
    assert like_pattern("c:\\x") == "%c:\\\\x%"


def test_unsafe_table_name_rejected() -> None:
    with pytest.raises(ValueError, match="Unsafe SQL identifier"):
        DatabaseOrderStorage(db=RecordingDBClient(), orders_table="orders;--")  # type: ignore[arg-type]


def test_get_orders_without_search_has_no_filter() -> None:
    db = RecordingDBClient(rows=[_row(id=2), _row(id=1)])
    orders = _storage(db).get_orders()

    query, params = db.calls[0]
    assert "ILIKE" not in query
    assert query.endswith("ORDER BY o.created_at DESC, o.id DESC")
    assert params == {}
    assert [order.id for order in orders] == [2, 1]
    assert orders[0].balance == 300


def test_get_orders_with_search_ors_all_fields() -> None:
    db = RecordingDBClient(rows=[_row()])
    _storage(db).get_orders("Galaxy")

    query, params = db.calls[0]
    for column in ("customer_name", "client_dni", "phone", "device_model", "issue_description"):
        assert f"o.{column} ILIKE :pattern" in query
    assert query.count(" OR ") == 4
    assert params == {"pattern": "%Galaxy%"}


def test_get_orders_by_dni_uses_exact_match() -> None:
    db = RecordingDBClient(rows=[])
    assert _storage(db).get_orders_by_dni("30111222") == []

    query, params = db.calls[0]
    assert "o.client_dni = :dni" in query
    assert params == {"dni": "30111222"}


def test_get_order_maps_row_and_missing() -> None:
    found = _storage(RecordingDBClient(rows=[_row(deposit=700)])).get_order(1)
    assert found is not None
    assert found.checklist.powers_on is True
    assert found.balance == -200

    assert _storage(RecordingDBClient(rows=[])).get_order(1) is None


def test_create_order_serializes_checklist_and_returns_row() -> None:
    db = RecordingDBClient(returning=_row())
    order = _storage(db).create_order(order_fields())

    query, params = db.calls[0]
    assert query.startswith("INSERT INTO orders (")
    assert "CAST(:checklist AS JSONB)" in query
    assert "RETURNING id," in query
    assert json.loads(params["checklist"])["powers_on"] is False
    assert params["status"] == "Recibido"
    assert params["device_type"] == "Smartphone"
    assert order.id == 1
    assert order.balance == 300


def test_create_log_line_carries_only_order_id(caplog: pytest.LogCaptureFixture) -> None:
    db = RecordingDBClient(returning=_row(id=17))
    with caplog.at_level(logging.INFO, logger="orders"):
        _storage(db).create_order(order_fields(client_dni="30111222"))

    assert "order created id=17" in caplog.messages
    assert all("30111222" not in message for message in caplog.messages)


def test_update_order_sets_only_provided_fields() -> None:
    db = RecordingDBClient(returning=_row(status="Finalizado"))
    order = _storage(db).update_order(1, OrderUpdate(status="Finalizado"))

    query, params = db.calls[0]
    assert "SET status = :status, updated_at = NOW()" in query
    assert params == {"status": "Finalizado", "order_id": 1}
    assert order.status == "Finalizado"


def test_partial_checklist_update_binds_all_flags() -> None:
    db = RecordingDBClient(returning=_row())
    changes = OrderUpdate.model_validate({"checklist": {"charges": True}})
    _storage(db).update_order(1, changes)

    query, params = db.calls[0]
    assert "checklist = CAST(:checklist AS JSONB)" in query
    assert json.loads(params["checklist"]) == {
        "powers_on": False,
        "charges": True,
        "has_audio": False,
        "screen_intact": False,
        "touch_works": False,
        "buttons_work": False,
    }


def test_empty_update_still_touches_updated_at() -> None:
    db = RecordingDBClient(returning=_row())
    _storage(db).update_order(1, OrderUpdate())

    query, params = db.calls[0]
    assert "SET updated_at = NOW()" in query
    assert params == {"order_id": 1}


def test_update_missing_row_raises_not_found() -> None:
    with pytest.raises(OrderNotFoundError):
        _storage(RecordingDBClient(returning=None)).update_order(5, OrderUpdate(deposit=1))


def test_delete_reports_whether_row_removed() -> None:
    assert _storage(RecordingDBClient(rowcount=1)).delete_order(1) is True
    assert _storage(RecordingDBClient(rowcount=0)).delete_order(1) is False


def test_stats_scan_whole_table() -> None:
    db = RecordingDBClient(
        rows=[
            {"status": "Entregado", "estimated_cost": 100, "deposit": 100},
            {"status": "Recibido", "estimated_cost": 500, "deposit": 200},
            {"status": "Finalizado", "estimated_cost": 50, "deposit": 80},
        ]
    )
    stats = _storage(db).get_stats()

    query, _ = db.calls[0]
    assert query == "SELECT status, estimated_cost, deposit FROM orders"
    assert stats.total_orders == 3
    assert stats.active_orders == 1
    assert stats.completed_orders == 2
    assert stats.total_revenue == 380
    assert stats.pending_revenue == 270


def test_user_lookup_maps_row() -> None:
    db = RecordingDBClient(rows=[{"id": 3, "username": "admin", "password": "pw"}])
    user = _storage(db).get_user_by_username("admin")

    query, params = db.calls[0]
    assert "WHERE username = :username" in query
    assert params == {"username": "admin"}
    assert user is not None
    assert user.id == 3
