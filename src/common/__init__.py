"""
Package marker for shared helpers in `src.common`.
It groups settings, logging, and database access under a stable import path.
"""
