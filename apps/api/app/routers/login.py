"""Credential login issuing bearer tokens."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.schemas.auth import LoginRequest, TokenResponse
from app.services.accounts import AccountService, get_account_service

router = APIRouter(prefix="/login", tags=["Login"])


@router.post("/logar", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    service: AccountService = Depends(get_account_service),
) -> TokenResponse:
    """Exchange email and password for a one-hour access token.

    Unknown emails and wrong passwords produce the same 403 response.
    """

    token = service.login(email=payload.email, password=payload.password)
    return TokenResponse(token=token)
