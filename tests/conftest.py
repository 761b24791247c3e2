"""
Pytest configuration and fixtures
"""
import os
from datetime import datetime

# Must be set before config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app import create_app
from core.database import Database
from schemas.assignment import AssignmentCreate
from utils.assignment_manager import AssignmentManager
from utils.submission_manager import SubmissionManager

ALICE = "aaaaaaaaaaaaaaaaaaaaaaa1"
BOB = "bbbbbbbbbbbbbbbbbbbbbbb2"


@pytest.fixture
def database():
    """Fresh in-memory database shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database = Database(engine=engine)
    database.init()
    yield database
    database.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def assignment_manager(db_session):
    return AssignmentManager(db_session)


@pytest.fixture
def submission_manager(db_session):
    return SubmissionManager(db_session)


@pytest.fixture
def client(database):
    with TestClient(create_app(database)) as test_client:
        yield test_client


@pytest.fixture
def make_assignment(assignment_manager):
    """Create an assignment through the manager."""

    def _make(nom, due, user_id=ALICE, rendu=False, description=None):
        return assignment_manager.create_assignment(
            AssignmentCreate(
                nom=nom,
                date_de_rendu=due,
                description=description,
                user_id=user_id,
                rendu=rendu,
            )
        )

    return _make


def day(month, dom, year=2023):
    return datetime(year, month, dom)
