"""User routes."""

from typing import List

from fastapi import APIRouter, HTTPException, status

from config import API_PREFIX
from core.dependencies import UserManagerDep
from core.exceptions import UserAlreadyExistsError, UserNotFoundError
from schemas.user import CreateUserRequest, UserPublic

router = APIRouter(prefix=f"{API_PREFIX}/users", tags=["Users"])


@router.post(
    "",
    response_model=UserPublic,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
def create_user(req: CreateUserRequest, user_manager: UserManagerDep) -> UserPublic:
    try:
        user = user_manager.create_user(
            username=req.username,
            password=req.password,
            name=req.name,
            is_admin=req.is_admin,
        )
    except UserAlreadyExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    return UserPublic.from_user(user)


@router.get("", response_model=List[UserPublic], summary="List users")
def list_users(user_manager: UserManagerDep) -> List[UserPublic]:
    return [UserPublic.from_user(user) for user in user_manager.list_users()]


@router.get("/{user_id}", response_model=UserPublic, summary="Get one user")
def get_user(user_id: str, user_manager: UserManagerDep) -> UserPublic:
    try:
        return UserPublic.from_user(user_manager.get_user_by_id(user_id))
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
