# This file provides dependency factories for FastAPI routes.
# It exists so the database client and order storage are created once and shared through injection.
# Tests override these factories to run routers against the in-memory storage.

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from src.api.api_config import ApiConfig, get_api_config
from src.api.services.auth_service import AuthService
from src.common.db import DatabaseClient
from src.orders.sql_storage import DatabaseOrderStorage
from src.orders.storage import OrderStorage


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    return DatabaseClient(database_url=config.database_url)


@lru_cache(maxsize=1)
def get_order_storage() -> OrderStorage:
    config = get_api_config()
    return DatabaseOrderStorage(
        db=get_database_client(),
        orders_table=config.orders_table_name,
        users_table=config.users_table_name,
    )


def get_auth_service(storage: Annotated[OrderStorage, Depends(get_order_storage)]) -> AuthService:
    return AuthService(storage=storage)


def get_config() -> ApiConfig:
    return get_api_config()
