"""Conversions between ORM models and pydantic schemas."""

from models.assignment import AssignmentModel
from models.user import UserModel
from schemas.assignment import Assignment
from schemas.user import User


def user_to_model(user: User) -> UserModel:
    return UserModel(
        user_id=user.user_id,
        username=user.username,
        password_hash=user.password_hash,
        name=user.name,
        is_admin=user.is_admin,
        create_at=user.create_at,
    )


def model_to_user(model: UserModel) -> User:
    return User(
        user_id=model.user_id,
        username=model.username,
        password_hash=model.password_hash,
        name=model.name,
        is_admin=bool(model.is_admin),
        create_at=model.create_at,
    )


def model_to_assignment(model: AssignmentModel, rendu: bool) -> Assignment:
    """Build the client view of an assignment with its computed completion."""
    return Assignment(
        assignment_id=model.id,
        nom=model.nom,
        date_de_rendu=model.date_de_rendu,
        description=model.description,
        user_id=model.user_id,
        rendu=bool(rendu),
    )
