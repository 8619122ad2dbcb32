"""Order model definitions."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, Text
from food_delight.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Order(Base):
    """Represents a placed order. Items are stored as JSON text."""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column("userId", Integer, ForeignKey("users.id"), nullable=False, index=True)
    items = Column(Text, nullable=False)
    total = Column(Float, nullable=False)
    created_at = Column("orderDate", DateTime(timezone=True), nullable=False, default=_utcnow)
