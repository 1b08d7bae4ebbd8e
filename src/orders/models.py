# This file defines the repair-order record, its create/update inputs, and the stats and user shapes.
# Balance is exposed as a computed field so every serialized order carries it without it being stored.
# Create and update inputs are the validation boundary: enum and range checks happen here, not in storage.

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from src.orders.balance import calculate_balance
from src.orders.constants import MAX_MINOR_UNITS, DeviceType, OrderStatus


class Checklist(BaseModel):
    """Intake diagnostic flags recorded when the device is received."""

    powers_on: bool = False
    charges: bool = False
    has_audio: bool = False
    screen_intact: bool = False
    touch_works: bool = False
    buttons_work: bool = False


class OrderCreate(BaseModel):
    customer_name: str
    client_dni: str = Field(max_length=20)
    phone: str = Field(max_length=20)
    device_type: DeviceType = "Smartphone"
    device_model: str
    issue_description: str
    checklist: Checklist = Field(default_factory=Checklist)
    estimated_cost: int = Field(ge=0, le=MAX_MINOR_UNITS)
    deposit: int = Field(ge=0, le=MAX_MINOR_UNITS)
    status: OrderStatus = "Recibido"


class OrderUpdate(BaseModel):
    """Partial order changes; only fields the caller actually sent are applied."""

    customer_name: str | None = None
    client_dni: str | None = Field(default=None, max_length=20)
    phone: str | None = Field(default=None, max_length=20)
    device_type: DeviceType | None = None
    device_model: str | None = None
    issue_description: str | None = None
    checklist: Checklist | None = None
    estimated_cost: int | None = Field(default=None, ge=0, le=MAX_MINOR_UNITS)
    deposit: int | None = Field(default=None, ge=0, le=MAX_MINOR_UNITS)
    status: OrderStatus | None = None

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> OrderUpdate:
        nulls = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self

    def changes(self) -> dict[str, Any]:
        """Return only the explicitly provided fields; a sent checklist is always the full six flags."""

        values = self.model_dump(exclude_unset=True, exclude={"checklist"})
        if self.checklist is not None:
            values["checklist"] = self.checklist.model_dump()
        return values


class Order(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_name: str
    client_dni: str
    phone: str
    device_type: str
    device_model: str
    issue_description: str
    checklist: Checklist
    estimated_cost: int
    deposit: int
    status: str
    created_at: datetime
    updated_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def balance(self) -> int:
        return calculate_balance(self.estimated_cost, self.deposit)


class OrderStats(BaseModel):
    total_orders: int = 0
    active_orders: int = 0
    completed_orders: int = 0
    total_revenue: int = 0
    pending_revenue: int = 0


class User(BaseModel):
    id: int
    username: str
    password: str = Field(repr=False)
