"""Self-service profile updates and the paginated user directory."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.core.deps import Identity, get_current_identity
from app.core.pagination import PageWindow, get_page_window
from app.schemas.user import UserListResponse, UserRead, UserSelfUpdate
from app.services.accounts import AccountService, get_account_service

router = APIRouter(prefix="/perfil", tags=["Profile"])


@router.put("/meusDados", response_model=UserRead)
def update_my_data(
    payload: UserSelfUpdate,
    identity: Identity = Depends(get_current_identity),
    service: AccountService = Depends(get_account_service),
) -> UserRead:
    user = service.update_self(
        identity.user_id, payload.model_dump(exclude_unset=True, exclude_none=True)
    )
    return UserRead.model_validate(user)


@router.get("", response_model=UserListResponse)
def list_users(
    window: PageWindow = Depends(get_page_window),
    _identity: Identity = Depends(get_current_identity),
    service: AccountService = Depends(get_account_service),
) -> UserListResponse:
    users = service.list_users(window)
    return UserListResponse(
        users=[UserRead.model_validate(user) for user in users],
        page=window.page,
        limit=window.limit,
    )
