# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Common API models shared across resources.

All models serialize with camelCase keys and accept both camelCase and
snake_case on input.
"""

from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Range of a signed 64-bit integer column or LIMIT/OFFSET bind.
BIGINT_MIN = -(2**63)
BIGINT_MAX = 2**63 - 1

BigInt = Annotated[int, Field(ge=BIGINT_MIN, le=BIGINT_MAX)]


class CamelModel(BaseModel):
    """Base model with camelCase aliases and ORM attribute loading."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Pagination(CamelModel):
    """Pagination metadata returned with every list."""

    page: int = Field(description="Current page (1-based)")
    limit: int = Field(description="Rows per page")
    total: int = Field(description="Rows matching the filters")
    total_pages: int = Field(description="ceil(total / limit)")


class PaginatedResponse(CamelModel, Generic[T]):
    """List envelope: `{data, pagination}`."""

    data: list[T]
    pagination: Pagination


class DataResponse(CamelModel, Generic[T]):
    """Single-object envelope: `{data}`."""

    data: T


class CreatedId(CamelModel):
    """Identifier of a newly inserted row."""

    id: int
