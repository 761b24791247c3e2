from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from .base import Base


class AssignmentModel(Base):
    __tablename__ = "assignments"

    id = Column(String, primary_key=True, index=True)
    nom = Column(String, nullable=False, index=True)
    date_de_rendu = Column(DateTime, nullable=False, index=True)
    description = Column(Text, nullable=True)
    # Owner; completion is tracked per user in submissions, not here
    user_id = Column(String, ForeignKey("users.user_id"), nullable=True, index=True)
