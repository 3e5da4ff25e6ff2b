"""
Page/rows pagination shared by the list use cases.
"""

import math
from typing import List, Optional, Sequence, Tuple, TypeVar

from pydantic import BaseModel

from libs.result import Error, Result, Return
from shortlink.domain.entities import ErrorCode

T = TypeVar("T")


class PaginationInfo(BaseModel):
    """Pagination metadata returned with list responses"""

    total: int
    page: int
    per_page: int
    total_pages: int


def paginate(
    items: Sequence[T], page: int = 1, rows: Optional[int] = None
) -> Result[Tuple[List[T], PaginationInfo]]:
    """
    Slice items into one page.

    Args:
        items: Full ordered collection
        page: 1-based page number
        rows: Items per page, all items when omitted

    Returns:
        Result with (page items, PaginationInfo), or Error
        INVALID_PAGINATION_PARAMETERS
    """
    total = len(items)
    if rows is None:
        rows = max(1, total)

    if page < 1:
        return _invalid("Page number must be greater than 0.")
    if rows < 1:
        return _invalid("Rows per page must be greater than 0.")

    total_pages = math.ceil(total / rows)
    if page > total_pages and total_pages > 0:
        return _invalid("Page number exceeds total pages.")

    start = (page - 1) * rows
    return Return.ok(
        (
            list(items[start : start + rows]),
            PaginationInfo(
                total=total, page=page, per_page=rows, total_pages=total_pages
            ),
        )
    )


def _invalid(message: str) -> Result:
    return Return.err(Error(ErrorCode.INVALID_PAGINATION_PARAMETERS, message))
