# This file defines order endpoint response envelopes and the login payloads.
# Request bodies reuse the order create/update models so enum and range checks live in one place.

from __future__ import annotations

from pydantic import BaseModel

from src.api.schemas.common import EnvelopeFields
from src.orders.models import Order, OrderStats


class OrderResponseV1(EnvelopeFields):
    data: Order


class OrderListResponseV1(EnvelopeFields):
    data: list[Order]


class OrderStatsResponseV1(EnvelopeFields):
    data: OrderStats


class LoginRequest(BaseModel):
    username: str
    password: str


class MessageResponse(BaseModel):
    message: str
