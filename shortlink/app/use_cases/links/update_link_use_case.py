import logging

from libs.result import Result, Return
from shortlink.app.services.clock import Clock
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.unit_of_work import UnitOfWork
from .dtos import LinkInfo, UpdateLinkCommand
from .get_link_use_case import load_link
from .validation import resolve_expiry, validate_uri

logger = logging.getLogger(__name__)


class UpdateLinkUseCase:
    """
    Use case for changing a link's target or expiry.

    Business Rules:
    - The key never changes
    - ttl_minutes counts from the time of the update; 0 removes the expiry
    """

    def __init__(self, uow: UnitOfWork, context: SecurityContext, clock: Clock):
        self.uow = uow
        self.context = context
        self.clock = clock

    async def execute(self, key: str, command: UpdateLinkCommand) -> Result[LinkInfo]:
        async with self.uow:
            actor = self.context.account_id()
            if actor.is_err():
                return Return.err(actor.error)

            result = await load_link(self.uow, key)
            if result.is_err():
                return Return.err(result.error)
            link = result.value

            if command.uri is not None:
                invalid = validate_uri(command.uri)
                if invalid is not None:
                    return Return.err(invalid)
                link.uri = command.uri

            now = self.clock.now()
            if command.expires_at is not None or command.ttl_minutes is not None:
                expiry = resolve_expiry(command.expires_at, command.ttl_minutes, now)
                if expiry.is_err():
                    return Return.err(expiry.error)
                link.expires_at = expiry.value

            link.set_provenance(link.provenance.touched(actor.value, now))
            link = await self.uow.links.update(link)

            info = LinkInfo.from_entity(link)
            await self.uow.commit()

            logger.info(f"Link '{key}' updated by '{actor.value}'")
            return Return.ok(info)
