"""
Unit tests for order statistics aggregation.
Revenue must cover every order, not only completed ones.
"""

from src.orders.stats import StatRow, aggregate_stats, is_completed


def test_empty_shop_has_zero_stats() -> None:
    stats = aggregate_stats([])
    assert stats.total_orders == 0
    assert stats.active_orders == 0
    assert stats.completed_orders == 0
    assert stats.total_revenue == 0
    assert stats.pending_revenue == 0


def test_three_status_scenario() -> None:
    stats = aggregate_stats(
        [
            StatRow(status="Entregado", estimated_cost=100, deposit=100),
            StatRow(status="Recibido", estimated_cost=100, deposit=0),
            StatRow(status="Finalizado", estimated_cost=100, deposit=50),
        ]
    )
    assert stats.total_orders == 3
    assert stats.active_orders == 1
    assert stats.completed_orders == 2


def test_revenue_sums_over_all_statuses() -> None:
    rows = [
        StatRow(status="Recibido", estimated_cost=500, deposit=200),
        StatRow(status="En reparación", estimated_cost=300, deposit=0),
        StatRow(status="Irreparable", estimated_cost=100, deposit=250),
    ]
    stats = aggregate_stats(rows)
    assert stats.total_revenue == 450
    # Overpaid order contributes -150.
    assert stats.pending_revenue == 300 + 300 - 150
    assert stats.active_orders + stats.completed_orders == stats.total_orders


def test_completed_statuses() -> None:
    assert is_completed("Entregado")
    assert is_completed("Finalizado")
    assert is_completed("Irreparable")
    assert not is_completed("Recibido")
    assert not is_completed("En reparación")
    assert not is_completed("Esperando repuestos")
