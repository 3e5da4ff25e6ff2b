from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from shortlink.api.error import to_http_error
from shortlink.app.services.clock import Clock
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.app.use_cases.links import (
    CreateLinkCommand,
    CreateLinkUseCase,
    DeleteLinkUseCase,
    GetLinkUseCase,
    KeyGeneratorFactory,
    LinkInfo,
    LinkListResponse,
    ListLinksUseCase,
    UpdateLinkCommand,
    UpdateLinkUseCase,
)
from shortlink.depends import (
    get_clock,
    get_key_generator_factory,
    get_security_context,
    get_unit_of_work,
)

router = APIRouter(prefix="/links", tags=["Links"])


class CreateLinkRequest(BaseModel):
    """
    Create link HTTP request payload

    key is generated when omitted. Give at most one of expires_at / ttl_minutes.
    """

    uri: str = Field(..., min_length=1, max_length=2048, description="Destination URL")
    key: Optional[str] = Field(None, description="Custom short key")
    expires_at: Optional[datetime] = Field(None, description="Absolute expiry (UTC)")
    ttl_minutes: Optional[int] = Field(None, description="Minutes until expiry, 0 = never")


class UpdateLinkRequest(BaseModel):
    """Update link HTTP request payload; omitted fields are left unchanged"""

    uri: Optional[str] = Field(None, min_length=1, max_length=2048)
    expires_at: Optional[datetime] = None
    ttl_minutes: Optional[int] = None


class MessageResponse(BaseModel):
    message: str


@router.get("", status_code=status.HTTP_200_OK, response_model=LinkListResponse)
async def list_links(
    page: int = Query(1),
    rows: Optional[int] = Query(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: SecurityContext = Depends(get_security_context),
):
    """
    List Links, expired ones included

    Raises:
        - 400 Bad Request: Invalid page/rows
        - 401 Unauthorized: Missing, unknown or expired token
    """
    result = await ListLinksUseCase(uow, context).execute(page, rows)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=LinkInfo)
async def create_link(
    request: CreateLinkRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: SecurityContext = Depends(get_security_context),
    clock: Clock = Depends(get_clock),
    key_generator_factory: KeyGeneratorFactory = Depends(get_key_generator_factory),
):
    """
    Create Link

    Raises:
        - 400 Bad Request: Invalid URI, key or expiry
        - 401 Unauthorized: Missing, unknown or expired token
        - 409 Conflict: Custom key already taken
        - 500 Internal Server Error: No unique key could be generated
    """
    command = CreateLinkCommand(
        uri=request.uri,
        key=request.key,
        expires_at=request.expires_at,
        ttl_minutes=request.ttl_minutes,
    )
    use_case = CreateLinkUseCase(uow, context, clock, key_generator_factory)
    result = await use_case.execute(command)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("/{key}", status_code=status.HTTP_200_OK, response_model=LinkInfo)
async def get_link(
    key: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: SecurityContext = Depends(get_security_context),
):
    """
    Get Link by key

    Raises:
        - 401 Unauthorized: Missing, unknown or expired token
        - 404 Not Found: No such link
    """
    result = await GetLinkUseCase(uow, context).execute(key)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.put("/{key}", status_code=status.HTTP_200_OK, response_model=LinkInfo)
@router.patch("/{key}", status_code=status.HTTP_200_OK, response_model=LinkInfo)
async def update_link(
    key: str,
    request: UpdateLinkRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: SecurityContext = Depends(get_security_context),
    clock: Clock = Depends(get_clock),
):
    """
    Update Link target and/or expiry

    Raises:
        - 400 Bad Request: Invalid URI or expiry
        - 401 Unauthorized: Missing, unknown or expired token
        - 404 Not Found: No such link
    """
    command = UpdateLinkCommand(
        uri=request.uri, expires_at=request.expires_at, ttl_minutes=request.ttl_minutes
    )
    result = await UpdateLinkUseCase(uow, context, clock).execute(key, command)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.delete("/{key}", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def delete_link(
    key: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: SecurityContext = Depends(get_security_context),
):
    """
    Delete Link

    Raises:
        - 401 Unauthorized: Missing, unknown or expired token
        - 404 Not Found: No such link
    """
    result = await DeleteLinkUseCase(uow, context).execute(key)
    if result.is_err():
        raise to_http_error(result.error)
    return MessageResponse(message="Link deleted successfully.")
