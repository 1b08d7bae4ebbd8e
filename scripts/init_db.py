#!/usr/bin/env python3
"""
Create the order and user tables in the configured database.
It packages a repeatable setup step so fresh environments are initialized consistently.
Run it directly, and expect it to print a JSON summary and exit non-zero when the database is unreachable.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.common.db import DatabaseClient
from src.common.logging import configure_logging
from src.common.settings import get_settings
from src.orders.ddl import DEFAULT_DDL_DIR, apply_order_ddl


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Apply repair-order DDL to the configured database")
    parser.add_argument("--ddl-dir", type=Path, default=DEFAULT_DDL_DIR)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging()
    db = DatabaseClient(database_url=get_settings().DATABASE_URL)

    if not db.can_connect():
        print("Database is unreachable; check DATABASE_URL.", file=sys.stderr)
        sys.exit(1)

    apply_order_ddl(db.engine, ddl_dir=args.ddl_dir)
    print(
        json.dumps(
            {
                "orders_table": db.table_exists("orders"),
                "users_table": db.table_exists("users"),
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    main()
