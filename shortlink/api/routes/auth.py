from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from shortlink.api.error import to_http_error
from shortlink.app.services.password_hasher import PasswordHasher
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.app.use_cases.auth import (
    LoginResponse,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
)
from shortlink.depends import (
    get_anonymous_context,
    get_password_hasher,
    get_security_context,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    id: str = Field(..., min_length=1, max_length=64, description="Account ID")
    password: str = Field(..., min_length=1, description="Account password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: SecurityContext = Depends(get_anonymous_context),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """
    Account Login

    Checks the account ID and password and issues a new bearer token.

    Raises:
        - 401 Unauthorized: Unknown account or wrong password
        - 403 Forbidden: Account disabled
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, context, hasher)
    result = await use_case.execute(request.id, request.password)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: SecurityContext = Depends(get_security_context),
):
    """
    Account Logout

    Revokes every active token of the caller, including the one presented.

    Raises:
        - 401 Unauthorized: Missing, unknown or expired token
        - 500 Internal Server Error: Server error
    """
    use_case = LogoutUseCase(uow, context)
    result = await use_case.execute()

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
