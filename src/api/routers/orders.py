# This file defines repair-order endpoints under the versioned API path.
# It exists so the shop front end can list, search, create, edit, and delete orders and read shop stats.
# Request bodies are validated by the order create/update models before storage is touched.
# Missing orders map to 404; storage failures fall through to the global 500 handler.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status

from src.api.api_config import ApiConfig
from src.api.dependencies import get_config, get_order_storage
from src.api.error_handlers import APIError
from src.api.response_envelope import build_object_envelope
from src.api.schemas.order_schemas import (
    OrderListResponseV1,
    OrderResponseV1,
    OrderStatsResponseV1,
)
from src.orders.models import Order, OrderCreate, OrderStats, OrderUpdate
from src.orders.storage import OrderStorage

router = APIRouter(prefix="/orders", tags=["orders"])
StorageDep = Annotated[OrderStorage, Depends(get_order_storage)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]


def _envelope(
    request: Request,
    config: ApiConfig,
    data: Order | list[Order] | OrderStats,
) -> dict[str, object]:
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=data,
    )


def _order_not_found(order_id: int) -> APIError:
    return APIError(
        status_code=404,
        error_code="ORDER_NOT_FOUND",
        message=f"Order {order_id} not found",
        details={"order_id": order_id},
    )


@router.get("", response_model=OrderListResponseV1)
def list_orders(
    request: Request,
    storage: StorageDep,
    config: ConfigDep,
    search: str | None = Query(default=None),
) -> dict[str, object]:
    return _envelope(request, config, storage.get_orders(search))


@router.get("/stats", response_model=OrderStatsResponseV1)
def order_stats(
    request: Request,
    storage: StorageDep,
    config: ConfigDep,
) -> dict[str, object]:
    return _envelope(request, config, storage.get_stats())


@router.get("/dni/{dni}", response_model=OrderListResponseV1)
def orders_by_dni(
    dni: str,
    request: Request,
    storage: StorageDep,
    config: ConfigDep,
) -> dict[str, object]:
    return _envelope(request, config, storage.get_orders_by_dni(dni))


@router.get("/{order_id}", response_model=OrderResponseV1)
def get_order(
    order_id: int,
    request: Request,
    storage: StorageDep,
    config: ConfigDep,
) -> dict[str, object]:
    order = storage.get_order(order_id)
    if order is None:
        raise _order_not_found(order_id)
    return _envelope(request, config, order)


@router.post("", response_model=OrderResponseV1, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    request: Request,
    storage: StorageDep,
    config: ConfigDep,
) -> dict[str, object]:
    return _envelope(request, config, storage.create_order(payload))


@router.patch("/{order_id}", response_model=OrderResponseV1)
def update_order(
    order_id: int,
    payload: OrderUpdate,
    request: Request,
    storage: StorageDep,
    config: ConfigDep,
) -> dict[str, object]:
    return _envelope(request, config, storage.update_order(order_id, payload))


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: int, storage: StorageDep) -> Response:
    if not storage.delete_order(order_id):
        raise _order_not_found(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
