"""
Order statistics aggregation.
Revenue figures cover every order regardless of status: `total_revenue` is cash already collected
as deposits and `pending_revenue` is the sum of balances still owed across the whole shop.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple, Protocol

from src.orders.balance import calculate_balance
from src.orders.constants import COMPLETED_STATUSES
from src.orders.models import OrderStats


class _StatRow(Protocol):
    status: str
    estimated_cost: int
    deposit: int


class StatRow(NamedTuple):
    status: str
    estimated_cost: int
    deposit: int


def is_completed(status: str) -> bool:
    return status in COMPLETED_STATUSES


def aggregate_stats(rows: Iterable[_StatRow]) -> OrderStats:
    """Single pass over all orders producing counts and revenue totals."""

    total_orders = 0
    completed_orders = 0
    total_revenue = 0
    pending_revenue = 0

    for row in rows:
        total_orders += 1
        if is_completed(row.status):
            completed_orders += 1
        total_revenue += row.deposit
        pending_revenue += calculate_balance(row.estimated_cost, row.deposit)

    return OrderStats(
        total_orders=total_orders,
        active_orders=total_orders - completed_orders,
        completed_orders=completed_orders,
        total_revenue=total_revenue,
        pending_revenue=pending_revenue,
    )
