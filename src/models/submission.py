from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from .base import Base


class SubmissionModel(Base):
    __tablename__ = "submissions"
    __table_args__ = (
        UniqueConstraint(
            "assignment_id",
            "user_id",
            name="uq_submissions_assignment_user",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    assignment_id = Column(
        String,
        ForeignKey("assignments.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    user_id = Column(
        String,
        ForeignKey("users.user_id"),
        index=True,
        nullable=False,
    )
    date = Column(DateTime(timezone=True), server_default=func.now())
