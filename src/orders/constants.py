"""Enumerations and defaults shared by the order model, storages, and API schemas."""

from __future__ import annotations

from typing import Final, Literal, get_args

DeviceType = Literal[
    "Smartphone",
    "Tablet",
    "Laptop",
    "PC",
    "Drone",
    "TV",
    "Smartwatch",
    "Consola",
    "Otro",
]

OrderStatus = Literal[
    "Recibido",
    "En reparación",
    "Esperando repuestos",
    "Finalizado",
    "Entregado",
    "Irreparable",
]

DEVICE_TYPES: Final[tuple[str, ...]] = get_args(DeviceType)
ORDER_STATUSES: Final[tuple[str, ...]] = get_args(OrderStatus)

# An order in any other status counts as active.
COMPLETED_STATUSES: Final[frozenset[str]] = frozenset({"Entregado", "Finalizado", "Irreparable"})

DEFAULT_DEVICE_TYPE: Final[str] = "Smartphone"
DEFAULT_STATUS: Final[str] = "Recibido"

# Money columns are Postgres INTEGER.
MAX_MINOR_UNITS: Final[int] = 2_147_483_647

SEARCHABLE_FIELDS: Final[tuple[str, ...]] = (
    "customer_name",
    "client_dni",
    "phone",
    "device_model",
    "issue_description",
)
