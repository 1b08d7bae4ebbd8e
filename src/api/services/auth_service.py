# This file implements credential checks for the login endpoint.
# It exists so routers never read user rows or compare secrets themselves.
# Session handling stays outside this service; it only answers whether a username/password pair is valid.

from __future__ import annotations

import hmac
import logging

from src.orders.models import User
from src.orders.storage import OrderStorage

LOGGER = logging.getLogger("auth")


class AuthService:
    """Username/password verification against stored users."""

    def __init__(self, *, storage: OrderStorage) -> None:
        self.storage = storage

    def authenticate(self, *, username: str, password: str) -> User | None:
        user = self.storage.get_user_by_username(username)
        if user is None:
            LOGGER.info("login rejected username=%s reason=unknown_user", username)
            return None
        if not hmac.compare_digest(user.password.encode("utf-8"), password.encode("utf-8")):
            LOGGER.info("login rejected username=%s reason=bad_password", username)
            return None
        LOGGER.info("login accepted username=%s", username)
        return user
