from .base import Base
from .user import UserModel
from .assignment import AssignmentModel
from .submission import SubmissionModel

__all__ = ["Base", "UserModel", "AssignmentModel", "SubmissionModel"]
