"""Authentication routes.

Accounts and token issuance belong to the identity provider; the forum only
exposes the profile behind a verified token.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header

from forum.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from forum.domain.error import DomainError
from forum.interface.error import raise_http_error

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.get("/me", response_model=GetCurrentUserResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: str | None = Header(default=None),
) -> GetCurrentUserResponse:
    """Get the currently authenticated user.

    Args:
        get_current_user_use_case: Get current user use case from DI
        authorization: Authorization header

    Returns:
        Public profile of the token's user

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    try:
        return await get_current_user_use_case.execute(
            GetCurrentUserRequest(authorization=authorization)
        )
    except DomainError as e:
        raise_http_error(e, "get_current_user")
