"""Assignment management module.

This module implements the assignment listing pipeline (search, completion
join, completion filter, sorting, pagination) and the single-assignment
read and write operations. Completion status comes from
``SubmissionManager`` and is attached to every assignment it returns.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from core.exceptions import AssignmentNotFoundError, ValidationError
from models.assignment import AssignmentModel
from schemas.assignment import (
    Assignment,
    AssignmentCreate,
    AssignmentPage,
    AssignmentQuery,
    AssignmentUpdate,
)
from schemas.user import new_object_id
from utils.converters import model_to_assignment
from utils.submission_manager import SubmissionManager, completion_clause

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the search text is matched literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class AssignmentManager:
    """Manages assignment operations using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize AssignmentManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db
        self.submissions = SubmissionManager(db)

    def _filtered_query(self, options: AssignmentQuery) -> Query:
        """Build the search + completion query shared by the count and the page.

        Each row is ``(AssignmentModel, rendu)``.
        """
        rendu = completion_clause(options.user_id).label("rendu")
        query = self.db.query(AssignmentModel, rendu)
        if options.search:
            query = query.filter(
                AssignmentModel.nom.ilike(
                    f"%{escape_like(options.search)}%", escape=LIKE_ESCAPE
                )
            )
        if options.hide_completed:
            query = query.filter(~completion_clause(options.user_id))
        return query

    def list_assignments(self, options: AssignmentQuery) -> AssignmentPage:
        """List one page of assignments.

        The total is a window count over the filtered set, selected in the
        same statement as the page, so it always counts exactly the rows
        that pagination walks through. Only a page past the end, which
        carries no rows to read it from, needs a separate count.

        Args:
            options: Search, completion filter, sort order, page and viewing user.

        Returns:
            AssignmentPage with the page's assignments and pagination metadata.
        """
        query = self._filtered_query(options)

        if options.sort == "desc":
            ordering = (AssignmentModel.date_de_rendu.desc(), AssignmentModel.id.desc())
        else:
            ordering = (AssignmentModel.date_de_rendu.asc(), AssignmentModel.id.asc())
        rows = (
            query.add_columns(func.count().over().label("total"))
            .order_by(*ordering)
            .offset(options.skip)
            .limit(options.limit)
            .all()
        )

        if rows:
            total = rows[0].total
        else:
            total = query.order_by(None).count()

        docs = [model_to_assignment(model, rendu) for model, rendu, _ in rows]
        logger.debug(
            "Listed %d of %d assignments (page=%d, limit=%d)",
            len(docs), total, options.page, options.limit,
        )
        return AssignmentPage.build(docs, total, options.page, options.limit)

    def _get_model(self, assignment_id: str) -> AssignmentModel:
        model = (
            self.db.query(AssignmentModel)
            .filter(AssignmentModel.id == assignment_id)
            .first()
        )
        if not model:
            raise AssignmentNotFoundError(assignment_id)
        return model

    def get_assignment(self, assignment_id: str, user_id: Optional[str] = None) -> Assignment:
        """Read one assignment with its completion status.

        Raises:
            AssignmentNotFoundError: If the assignment does not exist.
        """
        model = self._get_model(assignment_id)
        rendu = self.submissions.is_completed(model.id, user_id)
        return model_to_assignment(model, rendu)

    def create_assignment(self, data: AssignmentCreate) -> Assignment:
        """Create an assignment, optionally already completed by its user."""
        model = AssignmentModel(
            id=new_object_id(),
            nom=data.nom,
            date_de_rendu=data.date_de_rendu,
            description=data.description,
            user_id=data.user_id,
        )
        self.db.add(model)
        self.db.flush()
        if data.rendu and data.user_id:
            self.submissions.mark_completed(model.id, data.user_id)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Created assignment: %s (id=%s)", model.nom, model.id)

        rendu = self.submissions.is_completed(model.id, data.user_id)
        return model_to_assignment(model, rendu)

    def update_assignment(self, assignment_id: str, data: AssignmentUpdate) -> Assignment:
        """Update an assignment and reconcile one user's completion.

        The user whose completion is set is ``data.user_id`` if given, else
        the assignment's owner. Other users' submissions are untouched. The
        field update and the reconciliation are committed together.

        Raises:
            ValidationError: If the body's id differs from ``assignment_id``.
            AssignmentNotFoundError: If the assignment does not exist.
        """
        if data.assignment_id and data.assignment_id != assignment_id:
            raise ValidationError(
                f"Body id '{data.assignment_id}' does not match '{assignment_id}'"
            )
        model = self._get_model(assignment_id)
        model.nom = data.nom
        model.date_de_rendu = data.date_de_rendu
        model.description = data.description
        if data.user_id:
            model.user_id = data.user_id

        target_user_id = data.user_id or model.user_id
        if target_user_id:
            if data.rendu:
                self.submissions.mark_completed(model.id, target_user_id)
            else:
                self.submissions.unmark_completed(model.id, target_user_id)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Updated assignment: %s (id=%s)", model.nom, model.id)

        rendu = self.submissions.is_completed(model.id, target_user_id)
        return model_to_assignment(model, rendu)

    def delete_assignment(self, assignment_id: str) -> Tuple[str, int]:
        """Delete an assignment and every submission referencing it.

        Returns:
            The deleted assignment's title and the number of submissions removed.

        Raises:
            AssignmentNotFoundError: If the assignment does not exist.
        """
        model = self._get_model(assignment_id)
        nom = model.nom
        removed = self.submissions.delete_for_assignment(model.id)
        self.db.delete(model)
        self.db.commit()
        logger.info(
            "Deleted assignment: %s (id=%s, submissions=%d)", nom, assignment_id, removed
        )
        return nom, removed
