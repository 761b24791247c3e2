"""
Tests for completion resolution and submission bookkeeping
"""
import pytest
from sqlalchemy.exc import IntegrityError

from conftest import ALICE, BOB, day
from models.submission import SubmissionModel


def _count(db_session, assignment_id):
    return (
        db_session.query(SubmissionModel)
        .filter(SubmissionModel.assignment_id == assignment_id)
        .count()
    )


def test_resolve_scoped_only_counts_viewing_user(make_assignment, submission_manager, db_session):
    done = make_assignment("Maths", day(11, 20), user_id=ALICE, rendu=True)
    todo = make_assignment("French", day(12, 15), user_id=ALICE)

    ids = [done.assignment_id, todo.assignment_id]
    assert submission_manager.resolve(ids, ALICE) == {
        done.assignment_id: True,
        todo.assignment_id: False,
    }
    assert submission_manager.resolve(ids, BOB) == {
        done.assignment_id: False,
        todo.assignment_id: False,
    }


def test_resolve_unscoped_counts_any_user(make_assignment, submission_manager, db_session):
    assignment = make_assignment("Maths", day(11, 20), user_id=ALICE)
    submission_manager.mark_completed(assignment.assignment_id, BOB)
    db_session.commit()

    assert submission_manager.is_completed(assignment.assignment_id) is True
    assert submission_manager.is_completed(assignment.assignment_id, ALICE) is False
    assert submission_manager.is_completed(assignment.assignment_id, BOB) is True


def test_resolve_empty_input(submission_manager):
    assert submission_manager.resolve([]) == {}


def test_resolve_unknown_assignment_is_not_completed(submission_manager):
    assert submission_manager.resolve(["missing"], ALICE) == {"missing": False}


def test_mark_completed_is_idempotent(make_assignment, submission_manager, db_session):
    assignment = make_assignment("Maths", day(11, 20))

    first = submission_manager.mark_completed(assignment.assignment_id, ALICE)
    second = submission_manager.mark_completed(assignment.assignment_id, ALICE)
    db_session.commit()

    assert first.id == second.id
    assert _count(db_session, assignment.assignment_id) == 1


def test_duplicate_pair_rejected_by_store(make_assignment, db_session):
    assignment = make_assignment("Maths", day(11, 20), rendu=True)

    db_session.add(SubmissionModel(assignment_id=assignment.assignment_id, user_id=ALICE))
    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()
    assert _count(db_session, assignment.assignment_id) == 1


def test_unmark_completed_only_touches_one_user(make_assignment, submission_manager, db_session):
    assignment = make_assignment("Maths", day(11, 20))
    submission_manager.mark_completed(assignment.assignment_id, ALICE)
    submission_manager.mark_completed(assignment.assignment_id, BOB)
    db_session.commit()

    assert submission_manager.unmark_completed(assignment.assignment_id, ALICE) == 1
    db_session.commit()

    assert submission_manager.is_completed(assignment.assignment_id, ALICE) is False
    assert submission_manager.is_completed(assignment.assignment_id, BOB) is True
    assert submission_manager.unmark_completed(assignment.assignment_id, ALICE) == 0


def test_delete_for_assignment_removes_every_user(make_assignment, submission_manager, db_session):
    target = make_assignment("Maths", day(11, 20))
    other = make_assignment("French", day(12, 15), rendu=True)
    submission_manager.mark_completed(target.assignment_id, ALICE)
    submission_manager.mark_completed(target.assignment_id, BOB)
    db_session.commit()

    assert submission_manager.delete_for_assignment(target.assignment_id) == 2
    db_session.commit()

    assert _count(db_session, target.assignment_id) == 0
    assert _count(db_session, other.assignment_id) == 1
