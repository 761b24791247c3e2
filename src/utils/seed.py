"""Demo data generation.

Replaces the content of the users, assignments and submissions tables with
two fixed accounts, a batch of generated users and a batch of generated
assignments, about half of which are completed by their owner.
"""

import logging
import random
from datetime import datetime, timedelta
from typing import Dict, List, Optional

import pytz
from sqlalchemy.orm import Session

from config import DEFAULT_PASSWORD, SEED_ASSIGNMENT_COUNT, SEED_USER_COUNT
from models.assignment import AssignmentModel
from models.submission import SubmissionModel
from models.user import UserModel
from schemas.user import User, new_object_id
from utils.converters import user_to_model
from utils.user_manager import hash_password

logger = logging.getLogger(__name__)

ADMIN_USER_ID = "652d0e81f702a9e6a2c3b1a1"
DEFAULT_USER_ID = "652d0e81f702a9e6a2c3b1a2"

SUBJECTS = [
    "Maths", "Français", "Histoire", "Anglais", "Physique",
    "SVT", "Philo", "Info", "Art", "Musique",
]
ACTIONS = ["Devoir de", "Projet de", "Exposé sur", "Exercices de", "Révision de"]

# Due dates fall in [now - 30 days, now + 60 days)
DUE_DATE_OFFSET_DAYS = (-30, 60)


def _build_users(password_hash: str, count: int) -> List[User]:
    users = [
        User(
            user_id=ADMIN_USER_ID,
            username="admin",
            password_hash=password_hash,
            name="Admin User",
            is_admin=True,
        ),
        User(
            user_id=DEFAULT_USER_ID,
            username="user",
            password_hash=password_hash,
            name="Normal User",
        ),
    ]
    for i in range(len(users) + 1, count + 1):
        users.append(
            User(username=f"user{i}", password_hash=password_hash, name=f"User {i}")
        )
    return users


def seed_database(
    db: Session,
    rng: Optional[random.Random] = None,
    user_count: int = SEED_USER_COUNT,
    assignment_count: int = SEED_ASSIGNMENT_COUNT,
) -> Dict[str, int]:
    """Wipe the tables and insert demo users, assignments and submissions.

    Args:
        db: SQLAlchemy Session.
        rng: Random source; pass a seeded one for reproducible data.
        user_count: Total number of users, the two fixed accounts included.
        assignment_count: Number of assignments to generate.

    Returns:
        Number of inserted rows per table.
    """
    rng = rng or random.Random()
    # Every seeded account shares one password, so hash it once
    users = _build_users(hash_password(DEFAULT_PASSWORD), max(user_count, 2))

    now = datetime.now(pytz.utc).replace(tzinfo=None)
    assignments = []
    submissions = []
    for i in range(1, assignment_count + 1):
        subject = rng.choice(SUBJECTS)
        action = rng.choice(ACTIONS)
        owner = rng.choice(users)
        assignment_id = new_object_id()
        assignments.append(
            AssignmentModel(
                id=assignment_id,
                nom=f"{action} {subject} #{i}",
                date_de_rendu=now + timedelta(days=rng.randrange(*DUE_DATE_OFFSET_DAYS)),
                description=f"Description détaillée pour le devoir de {subject} numéro {i}.",
                user_id=owner.user_id,
            )
        )
        if rng.random() < 0.5:
            submissions.append(
                SubmissionModel(assignment_id=assignment_id, user_id=owner.user_id)
            )

    db.query(SubmissionModel).delete(synchronize_session=False)
    db.query(AssignmentModel).delete(synchronize_session=False)
    db.query(UserModel).delete(synchronize_session=False)
    db.add_all([user_to_model(user) for user in users])
    db.flush()
    db.add_all(assignments)
    db.flush()
    db.add_all(submissions)
    db.commit()

    counts = {
        "assignments": len(assignments),
        "users": len(users),
        "submissions": len(submissions),
    }
    logger.info(
        "Seeded %d assignments, %d users, %d submissions",
        counts["assignments"], counts["users"], counts["submissions"],
    )
    return counts
