from datetime import timedelta
from functools import partial
from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from shortlink.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from shortlink.api.error import ClientError, to_http_error
from shortlink.app.services.clock import Clock, SystemClock
from shortlink.app.services.key_generator import KeyGenerator
from shortlink.app.services.password_hasher import PasswordHasher
from shortlink.app.services.random_source import RandomSource, SecureRandomSource
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.token_lifecycle import TokenLifecycleManager
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.app.use_cases.auth import MarkTokenUsedUseCase
from shortlink.app.use_cases.links import KeyGeneratorFactory
from shortlink.domain.entities import ErrorCode

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_clock() -> Clock:
    return SystemClock()


def get_random_source() -> RandomSource:
    return SecureRandomSource()


def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)


def get_token_lifecycle(
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
    random_source: RandomSource = Depends(get_random_source),
) -> TokenLifecycleManager:
    return TokenLifecycleManager(
        uow,
        clock,
        random_source,
        ttl=timedelta(minutes=ApplicationConfig.TOKEN_TTL_MINUTES),
    )


def get_key_generator_factory(
    random_source: RandomSource = Depends(get_random_source),
) -> KeyGeneratorFactory:
    """KeyGenerator needs the link repository, which only exists inside the unit of work"""
    return partial(
        KeyGenerator,
        random_source=random_source,
        length=ApplicationConfig.LINK_KEY_LENGTH,
        alphabet=ApplicationConfig.LINK_KEY_ALPHABET,
        max_attempts=ApplicationConfig.LINK_KEY_MAX_ATTEMPTS,
        reserved=ApplicationConfig.RESERVED_LINK_KEYS,
    )


def get_anonymous_context(
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenLifecycleManager = Depends(get_token_lifecycle),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> SecurityContext:
    """Fresh unauthenticated context, e.g. for login"""
    return SecurityContext(uow, tokens, hasher)


async def get_security_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenLifecycleManager = Depends(get_token_lifecycle),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """
    Dependency authenticating the request's bearer token.

    Yields:
        SecurityContext authenticated as the token's account

    Raises:
        ClientError: 401 if the token is missing, unknown or expired,
                     403 if its account is disabled
    """
    if credentials is None or not credentials.credentials:
        raise ClientError(
            Error(ErrorCode.MISSING_OR_INVALID_TOKEN, "Missing or invalid bearer token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    token_id = credentials.credentials
    context = SecurityContext(uow, tokens, hasher)
    async with uow:
        result = await context.authenticate_token_id(token_id)
    if result.is_err():
        # Owner gone: same answer as an unknown token
        overrides = {ErrorCode.ACCOUNT_NOT_FOUND: status.HTTP_401_UNAUTHORIZED}
        raise to_http_error(result.error, overrides)

    yield context

    # Only reached when the route did not raise
    if context.is_authenticated:
        await MarkTokenUsedUseCase(uow, tokens).execute(token_id)
