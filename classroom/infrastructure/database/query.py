# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared list/filter/paginate helpers.

Every list endpoint builds its WHERE clause from small predicate functions
folded together with combine_filters(), then hands a count statement and a
page statement sharing the same joins and predicate to paginate().

Example:
    params = parse_page_params(page, limit, max_limit=100)
    where = combine_filters(
        search_any(search, Subject.name, Subject.code) if search else None,
        contains(Department.name, department) if department else None,
    )
    rows, pagination = await paginate(session, count_stmt.where(where), page_stmt.where(where), params)
"""

import math
import re
from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement, Select, and_, false, or_, true
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.models.common import BIGINT_MAX, Pagination

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100


@dataclass(frozen=True)
class PageParams:
    """Normalized page/limit pair."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _leading_int(raw: Any) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return None
    return int(match.group(1))


def parse_page_params(
    page: Any,
    limit: Any,
    *,
    default_limit: int = DEFAULT_PAGE_LIMIT,
    max_limit: int | None = None,
) -> PageParams:
    """Normalize raw page/limit query values.

    Only the leading integer of each value is read, so "2abc" is page 2 and
    "abc" falls back to the default.

    Args:
        page: Raw page value. Missing, non-numeric or < 1 becomes 1. Pages
            whose offset would overflow a 64-bit integer are clamped.
        limit: Raw limit value. Missing or non-numeric becomes default_limit,
            < 1 becomes 1.
        default_limit: Limit used when none is given.
        max_limit: Optional ceiling for the limit.

    Returns:
        Normalized page parameters.
    """
    parsed_page = _leading_int(page)
    parsed_limit = _leading_int(limit)

    page_value = max(1, parsed_page if parsed_page is not None else 1)
    limit_value = max(1, parsed_limit if parsed_limit is not None else default_limit)
    limit_value = min(limit_value, max_limit if max_limit is not None else BIGINT_MAX)
    page_value = min(page_value, BIGINT_MAX // limit_value + 1)

    return PageParams(page=page_value, limit=limit_value)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def contains(column: Any, value: str) -> ColumnElement[bool]:
    """Case-insensitive containment of a user-supplied value."""
    return column.ilike(f"%{escape_like(value)}%", escape="\\")


def search_any(value: str, *columns: Any) -> ColumnElement[bool]:
    """Match rows where any of the columns contains the value."""
    if not columns:
        return false()
    return or_(*(contains(column, value) for column in columns))


def combine_filters(*clauses: ColumnElement[bool] | None) -> ColumnElement[bool]:
    """AND together every clause that is not None.

    With nothing to combine the result matches every row.
    """
    present = [clause for clause in clauses if clause is not None]
    if not present:
        return true()
    if len(present) == 1:
        return present[0]
    return and_(*present)


async def paginate(
    session: AsyncSession,
    count_stmt: Select[Any],
    page_stmt: Select[Any],
    params: PageParams,
) -> tuple[list[Any], Pagination]:
    """Run a count query and a sliced page query.

    Args:
        session: Session to execute on.
        count_stmt: Statement selecting a single count value.
        page_stmt: Ordered statement selecting the page rows.
        params: Normalized page parameters.

    Returns:
        Tuple of (rows, pagination metadata).
    """
    total = (await session.execute(count_stmt)).scalar_one() or 0
    result = await session.execute(page_stmt.limit(params.limit).offset(params.offset))
    rows = list(result.all())

    pagination = Pagination(
        page=params.page,
        limit=params.limit,
        total=total,
        total_pages=math.ceil(total / params.limit),
    )
    return rows, pagination
