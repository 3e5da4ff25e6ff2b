"""
Create Link Use Case

Creates a short link under a caller-chosen or generated key.
"""

import logging
from typing import Callable

from libs.result import Error, Result, Return
from shortlink.app.repositories.errors import ConstraintViolation
from shortlink.app.repositories.link_repository import ILinkRepository
from shortlink.app.services.clock import Clock
from shortlink.app.services.key_generator import KeyGenerator
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.domain.entities import ErrorCode, Link, ProvenanceMetadata
from .dtos import CreateLinkCommand, LinkInfo
from .validation import resolve_expiry, validate_uri

logger = logging.getLogger(__name__)

KeyGeneratorFactory = Callable[[ILinkRepository], KeyGenerator]


class CreateLinkUseCase:
    """
    Use case for link creation.

    Business Rules:
    - Caller must be authenticated; they are recorded as creator and updater
    - uri must be an absolute http(s) URL
    - A caller key that is taken fails with KEY_ALREADY_EXISTS, also when
      the insert itself loses a race
    - A generated key that loses the insert race is regenerated, with at most
      LINK_KEY_MAX_ATTEMPTS inserts before KEY_GENERATION_EXHAUSTED
    """

    def __init__(
        self,
        uow: UnitOfWork,
        context: SecurityContext,
        clock: Clock,
        key_generator_factory: KeyGeneratorFactory,
    ):
        self.uow = uow
        self.context = context
        self.clock = clock
        self.key_generator_factory = key_generator_factory

    async def execute(self, command: CreateLinkCommand) -> Result[LinkInfo]:
        async with self.uow:
            actor = self.context.account_id()
            if actor.is_err():
                return Return.err(actor.error)

            invalid = validate_uri(command.uri)
            if invalid is not None:
                return Return.err(invalid)

            now = self.clock.now()
            expiry = resolve_expiry(command.expires_at, command.ttl_minutes, now)
            if expiry.is_err():
                return Return.err(expiry.error)

            generator = self.key_generator_factory(self.uow.links)

            for attempt in range(1, generator.max_attempts + 1):
                key_result = await generator.generate(command.key)
                if key_result.is_err():
                    return Return.err(key_result.error)
                key = key_result.value

                link = Link(key=key, uri=command.uri, expires_at=expiry.value)
                link.set_provenance(ProvenanceMetadata.created(actor.value, now))

                try:
                    link = await self.uow.links.create(link)
                except ConstraintViolation:
                    if command.key:
                        return Return.err(
                            Error(
                                ErrorCode.KEY_ALREADY_EXISTS,
                                f"Key '{key}' already exists",
                            )
                        )
                    logger.warning(
                        f"Generated key lost insert race on attempt "
                        f"{attempt}/{generator.max_attempts}"
                    )
                    continue

                info = LinkInfo.from_entity(link)
                await self.uow.commit()

                logger.info(f"Link '{key}' created by '{actor.value}'")
                return Return.ok(info)

            logger.error(
                f"Link insert failed {generator.max_attempts} times on generated keys"
            )
            return Return.err(
                Error(
                    ErrorCode.KEY_GENERATION_EXHAUSTED,
                    f"Could not store a unique key in {generator.max_attempts} attempts",
                )
            )
