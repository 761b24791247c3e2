"""User schema definitions.

This module defines the User data model and the authentication payloads.
"""

import secrets
from datetime import datetime
from typing import Optional

import pytz
from pydantic import BaseModel, ConfigDict, Field


def new_object_id() -> str:
    """Return a 24 hex character identifier."""
    return secrets.token_hex(12)


class User(BaseModel):
    """User data model, including the password hash."""

    user_id: str = Field(
        description="The unique identifier for the user.",
        default_factory=new_object_id,
    )
    username: str
    password_hash: str
    name: Optional[str] = None
    is_admin: bool = False
    create_at: str = Field(
        description="The time when the user was created.",
        default_factory=lambda: datetime.now(pytz.utc).isoformat(),
    )


class UserPublic(BaseModel):
    """User as exposed over HTTP; never carries the password hash."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="_id")
    username: str
    name: Optional[str] = None
    is_admin: bool = Field(default=False, alias="isAdmin")

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(
            user_id=user.user_id,
            username=user.username,
            name=user.name,
            is_admin=user.is_admin,
        )


class CreateUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    name: Optional[str] = None
    is_admin: bool = Field(default=False, alias="isAdmin")


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    success: bool
    user: UserPublic
    token: str

