from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from shortlink.api.error import to_http_error
from shortlink.app.services.clock import Clock
from shortlink.app.services.password_hasher import PasswordHasher
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.token_lifecycle import TokenLifecycleManager
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.app.use_cases.accounts import (
    AccountInfo,
    AccountListResponse,
    AccountTokensUseCase,
    CreateAccountCommand,
    CreateAccountUseCase,
    DeleteAccountUseCase,
    GetAccountUseCase,
    ListAccountsUseCase,
    TokenInfo,
    TokenListResponse,
    UpdateAccountCommand,
    UpdateAccountUseCase,
)
from shortlink.domain.entities import ErrorCode
from shortlink.depends import (
    get_clock,
    get_password_hasher,
    get_security_context,
    get_token_lifecycle,
    get_unit_of_work,
)

router = APIRouter(prefix="/accounts", tags=["Accounts"])


class CreateAccountRequest(BaseModel):
    """Create account HTTP request payload"""

    id: str = Field(..., min_length=1, max_length=64, description="Account ID")
    password: str = Field(..., min_length=1, description="Password or bcrypt hash")
    disabled: bool = Field(False, description="Create the account disabled")


class UpdateAccountRequest(BaseModel):
    """Update account HTTP request payload; omitted fields are left unchanged"""

    password: Optional[str] = Field(None, min_length=1)
    disabled: Optional[bool] = None


class MessageResponse(BaseModel):
    message: str


@router.get("", status_code=status.HTTP_200_OK, response_model=AccountListResponse)
async def list_accounts(
    page: int = Query(1),
    rows: Optional[int] = Query(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: SecurityContext = Depends(get_security_context),
):
    """
    List Accounts

    Raises:
        - 400 Bad Request: Invalid page/rows
        - 401 Unauthorized: Missing, unknown or expired token
    """
    result = await ListAccountsUseCase(uow, context).execute(page, rows)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=AccountInfo)
async def create_account(
    request: CreateAccountRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: SecurityContext = Depends(get_security_context),
    hasher: PasswordHasher = Depends(get_password_hasher),
    clock: Clock = Depends(get_clock),
):
    """
    Create Account

    Raises:
        - 400 Bad Request: Invalid ID or password too short
        - 401 Unauthorized: Missing, unknown or expired token
        - 409 Conflict: Account ID already taken
    """
    command = CreateAccountCommand(
        id=request.id, password=request.password, disabled=request.disabled
    )
    use_case = CreateAccountUseCase(
        uow,
        context,
        hasher,
        clock,
        id_pattern=ApplicationConfig.ACCOUNT_ID_PATTERN,
        min_password_length=ApplicationConfig.MIN_PASSWORD_LENGTH,
    )
    result = await use_case.execute(command)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("/{account_id}", status_code=status.HTTP_200_OK, response_model=AccountInfo)
async def get_account(
    account_id: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: SecurityContext = Depends(get_security_context),
):
    """
    Get Account by ID, or the caller's own account with "me"

    Raises:
        - 401 Unauthorized: Missing, unknown or expired token
        - 404 Not Found: No such account
    """
    result = await GetAccountUseCase(uow, context).execute(account_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.put("/{account_id}", status_code=status.HTTP_200_OK, response_model=AccountInfo)
@router.patch("/{account_id}", status_code=status.HTTP_200_OK, response_model=AccountInfo)
async def update_account(
    account_id: str,
    request: UpdateAccountRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: SecurityContext = Depends(get_security_context),
    hasher: PasswordHasher = Depends(get_password_hasher),
    clock: Clock = Depends(get_clock),
):
    """
    Update Account password and/or disabled flag

    Raises:
        - 400 Bad Request: Password too short
        - 401 Unauthorized: Missing, unknown or expired token
        - 404 Not Found: No such account
    """
    command = UpdateAccountCommand(password=request.password, disabled=request.disabled)
    use_case = UpdateAccountUseCase(
        uow,
        context,
        hasher,
        clock,
        min_password_length=ApplicationConfig.MIN_PASSWORD_LENGTH,
    )
    result = await use_case.execute(account_id, command)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.delete(
    "/{account_id}", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
async def delete_account(
    account_id: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: SecurityContext = Depends(get_security_context),
):
    """
    Delete Account together with its tokens

    Raises:
        - 401 Unauthorized: Missing, unknown or expired token
        - 404 Not Found: No such account
    """
    result = await DeleteAccountUseCase(uow, context).execute(account_id)
    if result.is_err():
        raise to_http_error(result.error)
    return MessageResponse(message="Account deleted successfully.")


@router.get(
    "/{account_id}/tokens",
    status_code=status.HTTP_200_OK,
    response_model=TokenListResponse,
)
async def list_account_tokens(
    account_id: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: SecurityContext = Depends(get_security_context),
    tokens: TokenLifecycleManager = Depends(get_token_lifecycle),
):
    """
    List the active tokens of an account

    Raises:
        - 401 Unauthorized: Missing, unknown or expired token
        - 404 Not Found: No such account
    """
    result = await AccountTokensUseCase(uow, context, tokens).list_active(account_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get(
    "/{account_id}/tokens/{token_id}",
    status_code=status.HTTP_200_OK,
    response_model=TokenInfo,
)
async def get_account_token(
    account_id: str,
    token_id: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: SecurityContext = Depends(get_security_context),
    tokens: TokenLifecycleManager = Depends(get_token_lifecycle),
):
    """
    Get one token of an account; "current" is the caller's current token

    Raises:
        - 401 Unauthorized: Missing, unknown or expired token
        - 404 Not Found: No such account or token
    """
    result = await AccountTokensUseCase(uow, context, tokens).get(account_id, token_id)
    if result.is_err():
        raise to_http_error(
            result.error, {ErrorCode.TOKEN_NOT_FOUND: status.HTTP_404_NOT_FOUND}
        )
    return result.value
