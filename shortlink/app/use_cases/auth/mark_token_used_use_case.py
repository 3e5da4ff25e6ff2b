from libs.result import Result, Return
from shortlink.app.services.token_lifecycle import TokenLifecycleManager
from shortlink.app.services.unit_of_work import UnitOfWork


class MarkTokenUsedUseCase:
    """Stamp last_used_at on a token once the request it authenticated succeeded"""

    def __init__(self, uow: UnitOfWork, tokens: TokenLifecycleManager):
        self.uow = uow
        self.tokens = tokens

    async def execute(self, token_id: str) -> Result[None]:
        async with self.uow:
            result = await self.tokens.get(token_id)
            if result.is_err():
                return Return.err(result.error)

            # Revoked in the meantime (e.g. logout): leave it alone
            if self.tokens.is_expired(result.value):
                return Return.ok()

            await self.tokens.mark_used(result.value)
            await self.uow.commit()
            return Return.ok()
