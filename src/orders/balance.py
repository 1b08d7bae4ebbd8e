"""Balance derivation for repair orders."""

from __future__ import annotations


def calculate_balance(estimated_cost: int, deposit: int) -> int:
    """Return the amount still owed; negative when the customer overpaid."""

    return estimated_cost - deposit
