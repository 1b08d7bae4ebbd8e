# This file defines the login endpoint used by the shop front end.
# It only confirms credentials; cookie or token issuance belongs to the deployment in front of the API.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_auth_service
from src.api.error_handlers import APIError
from src.api.schemas.order_schemas import LoginRequest, MessageResponse
from src.api.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


@router.post("/login", response_model=MessageResponse)
def login(payload: LoginRequest, service: AuthServiceDep) -> dict[str, str]:
    user = service.authenticate(username=payload.username, password=payload.password)
    if user is None:
        raise APIError(
            status_code=401,
            error_code="INVALID_CREDENTIALS",
            message="Invalid username or password.",
        )
    return {"message": f"Logged in as {user.username}"}
