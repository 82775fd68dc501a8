"""SQLAlchemy models mirroring the JSON users file."""
from __future__ import annotations

from sqlalchemy import Column, Integer, JSON

from .session import Base


class UserRecordRow(Base):
    """One element of the users collection; position keeps the array order."""

    __tablename__ = "user_records"

    position = Column(Integer, primary_key=True, autoincrement=False)
    payload = Column(JSON, nullable=False)
