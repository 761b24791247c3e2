"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes.
Managers are built per request around the request-scoped DB session.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from core.database import Database, get_database, get_db
from utils import assignment_manager
from utils import user_manager


def get_assignment_manager(
    db: Session = Depends(get_db),
) -> assignment_manager.AssignmentManager:
    """Get AssignmentManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        AssignmentManager instance.
    """
    return assignment_manager.AssignmentManager(db)


def get_user_manager(db: Session = Depends(get_db)) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db)


# Type aliases for dependency injection
DatabaseDep = Annotated[Database, Depends(get_database)]
DBSessionDep = Annotated[Session, Depends(get_db)]
AssignmentManagerDep = Annotated[
    assignment_manager.AssignmentManager, Depends(get_assignment_manager)
]
UserManagerDep = Annotated[
    user_manager.UserManager, Depends(get_user_manager)
]
