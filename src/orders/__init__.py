"""
Package marker for repair-order modules in `src.orders`.
It groups the order model, balance and stats logic, and the storage backends under one import path.
"""
