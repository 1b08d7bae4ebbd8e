"""DDL helpers for the order and user tables."""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.engine import Engine

LOGGER = logging.getLogger("orders")

DDL_ORDER = [
    "users.sql",
    "orders.sql",
]

DEFAULT_DDL_DIR = Path(__file__).resolve().parents[2] / "sql" / "ddl"


def apply_order_ddl(engine: Engine, ddl_dir: Path | None = None) -> None:
    """Apply order DDL files in deterministic order."""

    ddl_path = ddl_dir or DEFAULT_DDL_DIR
    with engine.begin() as connection:
        for ddl_file in DDL_ORDER:
            sql_text = (ddl_path / ddl_file).read_text(encoding="utf-8")
            connection.exec_driver_sql(sql_text)
            LOGGER.info("applied ddl file=%s", ddl_file)
