from fastapi import APIRouter, Depends

from app.core.deps import Identity, get_current_identity
from app.schemas.user import UserCountResponse
from app.services.accounts import AccountService, get_account_service

router = APIRouter(prefix="/numeroUsers", tags=["Users"])


@router.get("", response_model=UserCountResponse)
def read_user_count(
    identity: Identity = Depends(get_current_identity),
    service: AccountService = Depends(get_account_service),
) -> UserCountResponse:
    user = service.get_user(identity.user_id)
    return UserCountResponse(
        name=user.name,
        is_admin=user.is_admin,
        total_users=service.count_users(),
    )
