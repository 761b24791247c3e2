"""Submission management module.

A submission records that one user completed one assignment. Completion
status (``rendu``) is never stored on the assignment; it is resolved from
this table on every read, in one of two modes:

- scoped: a ``user_id`` is given and only that user's submission counts;
- unscoped: no ``user_id`` is given and a submission by anyone counts.

Mutating methods flush but never commit, so callers can fold them into
the same transaction as the assignment write.
"""

import logging
from typing import Dict, Iterable, Optional

from sqlalchemy import exists
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from models.assignment import AssignmentModel
from models.submission import SubmissionModel

logger = logging.getLogger(__name__)


def completion_clause(user_id: Optional[str] = None) -> ColumnElement:
    """Build the EXISTS predicate telling whether an assignment row is completed.

    The predicate correlates with ``AssignmentModel`` in the enclosing query.

    Args:
        user_id: Viewing user. When falsy, any user's submission counts.

    Returns:
        A boolean SQL expression usable as a column or a filter.
    """
    clause = exists().where(SubmissionModel.assignment_id == AssignmentModel.id)
    if user_id:
        clause = clause.where(SubmissionModel.user_id == user_id)
    return clause


class SubmissionManager:
    """Resolves and reconciles completion records using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize SubmissionManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def resolve(
        self, assignment_ids: Iterable[str], user_id: Optional[str] = None
    ) -> Dict[str, bool]:
        """Resolve completion status for several assignments in one query.

        Args:
            assignment_ids: Assignments to resolve.
            user_id: Viewing user; falsy means unscoped.

        Returns:
            Mapping of every requested assignment id to its completion flag.
        """
        ids = list(assignment_ids)
        if not ids:
            return {}
        query = self.db.query(SubmissionModel.assignment_id).filter(
            SubmissionModel.assignment_id.in_(ids)
        )
        if user_id:
            query = query.filter(SubmissionModel.user_id == user_id)
        completed = {row.assignment_id for row in query.distinct()}
        return {assignment_id: assignment_id in completed for assignment_id in ids}

    def is_completed(self, assignment_id: str, user_id: Optional[str] = None) -> bool:
        return self.resolve([assignment_id], user_id)[assignment_id]

    def get_submission(self, assignment_id: str, user_id: str) -> Optional[SubmissionModel]:
        return (
            self.db.query(SubmissionModel)
            .filter(
                SubmissionModel.assignment_id == assignment_id,
                SubmissionModel.user_id == user_id,
            )
            .first()
        )

    def mark_completed(self, assignment_id: str, user_id: str) -> SubmissionModel:
        """Ensure exactly one submission exists for (assignment, user).

        Calling it again for the same pair returns the existing record. A
        concurrent insert of the same pair is rejected by the unique
        constraint and surfaces as an IntegrityError.
        """
        existing = self.get_submission(assignment_id, user_id)
        if existing:
            return existing
        submission = SubmissionModel(assignment_id=assignment_id, user_id=user_id)
        self.db.add(submission)
        self.db.flush()
        logger.info("Marked assignment %s completed for user %s", assignment_id, user_id)
        return submission

    def unmark_completed(self, assignment_id: str, user_id: str) -> int:
        """Delete the submission of one user for one assignment, if any."""
        deleted = (
            self.db.query(SubmissionModel)
            .filter(
                SubmissionModel.assignment_id == assignment_id,
                SubmissionModel.user_id == user_id,
            )
            .delete(synchronize_session=False)
        )
        if deleted:
            logger.info(
                "Marked assignment %s not completed for user %s", assignment_id, user_id
            )
        return deleted

    def delete_for_assignment(self, assignment_id: str) -> int:
        """Delete every user's submission for an assignment."""
        return (
            self.db.query(SubmissionModel)
            .filter(SubmissionModel.assignment_id == assignment_id)
            .delete(synchronize_session=False)
        )
