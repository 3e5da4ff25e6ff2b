from libs.result import Result, Return
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.unit_of_work import UnitOfWork
from .dtos import LogoutResponse


class LogoutUseCase:
    """
    Use case for logout.

    Business Rules:
    - Revokes every active token of the caller, not only the presented one
    - The context is unauthenticated afterwards
    """

    def __init__(self, uow: UnitOfWork, context: SecurityContext):
        self.uow = uow
        self.context = context

    async def execute(self) -> Result[LogoutResponse]:
        async with self.uow:
            result = await self.context.deauthenticate()
            if result.is_err():
                return Return.err(result.error)

            await self.uow.commit()

            return Return.ok(
                LogoutResponse(
                    message="Logged out successfully.", revoked_count=result.value
                )
            )
