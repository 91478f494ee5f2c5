"""Account registration and administrator-only user management."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.core.deps import require_admin
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.user import AdminUserUpdate, UserCreate, UserRead
from app.services.accounts import AccountService, get_account_service

router = APIRouter(prefix="/registrar", tags=["Registration"])


@router.post("/cadastrar", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(
    payload: UserCreate,
    service: AccountService = Depends(get_account_service),
) -> UserRead:
    """Register a regular account."""

    user = service.register(name=payload.name, email=payload.email, password=payload.password)
    return UserRead.model_validate(user)


@router.post("/admins", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_admin(
    payload: UserCreate,
    _admin: User = Depends(require_admin),
    service: AccountService = Depends(get_account_service),
) -> UserRead:
    """Create another administrator; at most five may exist."""

    user = service.create_admin(name=payload.name, email=payload.email, password=payload.password)
    return UserRead.model_validate(user)


@router.put("/users/{user_id}", response_model=UserRead)
def update_user(
    user_id: str,
    payload: AdminUserUpdate,
    _admin: User = Depends(require_admin),
    service: AccountService = Depends(get_account_service),
) -> UserRead:
    user = service.admin_update_user(
        user_id, payload.model_dump(exclude_unset=True, exclude_none=True)
    )
    return UserRead.model_validate(user)


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    _admin: User = Depends(require_admin),
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    service.admin_delete_user(user_id)
    return MessageResponse(detail="User deleted")
