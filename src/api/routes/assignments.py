"""Assignment routes.

This module handles HTTP endpoints for listing, reading, creating,
updating and deleting assignments.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from config import API_PREFIX, DEFAULT_PAGE, DEFAULT_PAGE_LIMIT
from core.dependencies import AssignmentManagerDep
from core.exceptions import AssignmentNotFoundError, ValidationError
from schemas.assignment import (
    Assignment,
    AssignmentCreate,
    AssignmentMutationResponse,
    AssignmentPage,
    AssignmentQuery,
    AssignmentUpdate,
    MessageResponse,
    SortOrder,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{API_PREFIX}/assignments", tags=["Assignments"])


def _not_found(exc: AssignmentNotFoundError) -> HTTPException:
    logger.warning("Assignment not found: %s", exc.assignment_id)
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Assignment not found",
    )


@router.get("", response_model=AssignmentPage, summary="List assignments")
def list_assignments(
    assignment_manager: AssignmentManagerDep,
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1),
    sort: SortOrder = Query("asc"),
    search: str = Query(""),
    hide_completed: bool = Query(False, alias="hideCompleted"),
    user_id: Optional[str] = Query(None, alias="userId"),
) -> AssignmentPage:
    """List one page of assignments.

    ``rendu`` on each assignment is resolved for ``userId`` when given,
    otherwise it is true when any user completed the assignment.
    ``totalDocs`` counts assignments matching both the search and the
    completion filter.
    """
    options = AssignmentQuery(
        search=search,
        hide_completed=hide_completed,
        sort=sort,
        page=page,
        limit=limit,
        user_id=user_id or None,
    )
    return assignment_manager.list_assignments(options)


@router.get("/{assignment_id}", response_model=Assignment, summary="Get one assignment")
def get_assignment(
    assignment_id: str,
    assignment_manager: AssignmentManagerDep,
    user_id: Optional[str] = Query(None, alias="userId"),
) -> Assignment:
    try:
        return assignment_manager.get_assignment(assignment_id, user_id or None)
    except AssignmentNotFoundError as exc:
        raise _not_found(exc)


@router.post("", response_model=AssignmentMutationResponse, summary="Create an assignment")
def create_assignment(
    req: AssignmentCreate,
    assignment_manager: AssignmentManagerDep,
) -> AssignmentMutationResponse:
    assignment = assignment_manager.create_assignment(req)
    return AssignmentMutationResponse(
        message=f"{assignment.nom} saved!", assignment=assignment
    )


@router.put(
    "/{assignment_id}",
    response_model=AssignmentMutationResponse,
    summary="Update an assignment",
)
def update_assignment(
    assignment_id: str,
    req: AssignmentUpdate,
    assignment_manager: AssignmentManagerDep,
) -> AssignmentMutationResponse:
    """Update an assignment's fields and set ``rendu`` for one user.

    ``rendu`` applies to ``userId`` from the body, or to the assignment's
    owner when ``userId`` is omitted.
    """
    try:
        assignment = assignment_manager.update_assignment(assignment_id, req)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        )
    except AssignmentNotFoundError as exc:
        raise _not_found(exc)
    return AssignmentMutationResponse(message="updated", assignment=assignment)


@router.delete("/{assignment_id}", response_model=MessageResponse, summary="Delete an assignment")
def delete_assignment(
    assignment_id: str,
    assignment_manager: AssignmentManagerDep,
) -> MessageResponse:
    try:
        nom, _ = assignment_manager.delete_assignment(assignment_id)
    except AssignmentNotFoundError as exc:
        raise _not_found(exc)
    return MessageResponse(message=f"{nom} deleted")
