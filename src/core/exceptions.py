"""Custom exception classes for the homework tracker service.

Route handlers translate these into HTTP responses; store errors from
SQLAlchemy are handled at the application boundary instead.
"""


class HomeworkTrackerError(Exception):
    """Base exception for all homework tracker errors."""

    pass


class AssignmentNotFoundError(HomeworkTrackerError):
    """Raised when a requested assignment cannot be found."""

    def __init__(self, assignment_id: str):
        """Initialize the exception.

        Args:
            assignment_id: The ID of the assignment that was not found.
        """
        self.assignment_id = assignment_id
        super().__init__(f"Assignment '{assignment_id}' not found")


class UserNotFoundError(HomeworkTrackerError):
    """Raised when a requested user cannot be found."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User '{user_id}' not found")


class UserAlreadyExistsError(HomeworkTrackerError):
    """Raised when trying to create a user whose username is taken."""

    pass


class ValidationError(HomeworkTrackerError):
    """Raised when request data fails a check the schemas cannot express."""

    pass
