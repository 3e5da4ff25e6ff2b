from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from shortlink.api.error import to_http_error
from shortlink.app.services.clock import Clock
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.app.use_cases.links import ResolveLinkUseCase
from shortlink.depends import get_clock, get_unit_of_work

router = APIRouter(tags=["Redirect"])


@router.get("/{key}", include_in_schema=False)
async def follow_link(
    key: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Public redirect to the link's destination

    Raises:
        - 404 Not Found: No such link
        - 410 Gone: Link expired
    """
    result = await ResolveLinkUseCase(uow, clock).execute(key)
    if result.is_err():
        raise to_http_error(result.error)

    return RedirectResponse(
        url=result.value,
        status_code=status.HTTP_301_MOVED_PERMANENTLY,
        headers={"X-Redirected-By": "shortlink", "X-Redirect-Key": key},
    )
