"""
Resolve Link Use Case

Public lookup behind the redirect endpoint.
"""

from libs.result import Error, Result, Return
from shortlink.app.services.clock import Clock
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.domain.entities import ErrorCode
from .get_link_use_case import load_link


class ResolveLinkUseCase:
    """
    Use case for following a short link.

    Business Rules:
    - No authentication
    - Expired links answer LINK_EXPIRED, unknown keys LINK_NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(self, key: str) -> Result[str]:
        """
        Returns:
            Result with the destination URI, or Error
        """
        async with self.uow:
            result = await load_link(self.uow, key)
            if result.is_err():
                return Return.err(result.error)
            link = result.value

            if link.is_expired(self.clock.now()):
                return Return.err(
                    Error(ErrorCode.LINK_EXPIRED, f"Link '{key}' has expired")
                )
            return Return.ok(link.uri)
