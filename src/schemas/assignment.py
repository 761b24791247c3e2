"""Assignment schema definitions.

This module defines the request bodies, listing options and response
shapes for assignments. Field aliases carry the wire names used by the
web client (``_id``, ``dateDeRendu``, ``userId``); python code uses the
snake_case names.
"""

import math
from datetime import datetime
from typing import List, Literal, Optional

import pytz
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from config import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT

SortOrder = Literal["asc", "desc"]


class AssignmentCreate(BaseModel):
    """Body of ``POST /assignments``."""

    model_config = ConfigDict(populate_by_name=True)

    nom: str = Field(min_length=1, description="Title of the assignment.")
    date_de_rendu: datetime = Field(alias="dateDeRendu", description="Due date.")
    description: Optional[str] = Field(default=None)
    user_id: Optional[str] = Field(
        default=None,
        alias="userId",
        description="Owner of the assignment; also the user whose completion `rendu` sets.",
    )
    rendu: bool = Field(
        default=False,
        description="Whether `userId` has already completed the assignment.",
    )

    @field_validator("date_de_rendu")
    @classmethod
    def to_naive_utc(cls, value: datetime) -> datetime:
        """Store due dates as naive UTC so they compare consistently."""
        if value.tzinfo is not None:
            value = value.astimezone(pytz.utc).replace(tzinfo=None)
        return value


class AssignmentUpdate(AssignmentCreate):
    """Body of ``PUT /assignments/{id}``.

    ``userId`` is optional here: when omitted the owner is left unchanged
    and completion is reconciled for the existing owner. ``rendu`` is
    required, since the update always writes the target user's completion.
    """

    assignment_id: Optional[str] = Field(default=None, alias="_id")
    rendu: bool = Field(
        description="Whether the target user has completed the assignment.",
    )


class Assignment(BaseModel):
    """An assignment as returned to clients, with computed completion."""

    model_config = ConfigDict(populate_by_name=True)

    assignment_id: str = Field(alias="_id")
    nom: str
    date_de_rendu: datetime = Field(alias="dateDeRendu")
    description: Optional[str] = None
    user_id: Optional[str] = Field(default=None, alias="userId")
    rendu: bool = Field(
        default=False,
        description="Computed per request; never stored on the assignment.",
    )

    @computed_field
    @property
    def id(self) -> str:
        return self.assignment_id


class AssignmentQuery(BaseModel):
    """Options of one listing request."""

    search: str = ""
    hide_completed: bool = False
    sort: SortOrder = "asc"
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1)
    user_id: Optional[str] = None

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class AssignmentPage(BaseModel):
    """One page of assignments plus the size of the filtered set."""

    model_config = ConfigDict(populate_by_name=True)

    docs: List[Assignment]
    total_docs: int = Field(alias="totalDocs")
    limit: int
    page: int
    total_pages: int = Field(alias="totalPages")
    has_prev_page: bool = Field(alias="hasPrevPage")
    has_next_page: bool = Field(alias="hasNextPage")
    prev_page: Optional[int] = Field(default=None, alias="prevPage")
    next_page: Optional[int] = Field(default=None, alias="nextPage")

    @classmethod
    def build(cls, docs: List[Assignment], total: int, page: int, limit: int) -> "AssignmentPage":
        total_pages = math.ceil(total / limit)
        has_prev = page > 1
        has_next = page < total_pages
        return cls(
            docs=docs,
            total_docs=total,
            limit=limit,
            page=page,
            total_pages=total_pages,
            has_prev_page=has_prev,
            has_next_page=has_next,
            prev_page=page - 1 if has_prev else None,
            next_page=page + 1 if has_next else None,
        )


class AssignmentMutationResponse(BaseModel):
    message: str
    assignment: Assignment


class MessageResponse(BaseModel):
    message: str
