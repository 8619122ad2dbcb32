"""User model definitions."""

from sqlalchemy import Column, Integer, String
from food_delight.database import Base


class User(Base):
    """Represents a registered customer."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
