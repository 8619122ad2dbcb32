"""Order placement and lookup.

Items are kept as a JSON blob on the order row rather than as relational
rows. The client-computed total is stored as submitted; a mismatch with the
sum of the line totals is only logged.
"""

import json
import logging
import math
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from food_delight.core.errors import EmptyCart, InvalidTotal, OwnerMissing, StoreError
from food_delight.models.order import Order
from food_delight.models.user import User

logger = logging.getLogger(__name__)

TOTAL_TOLERANCE = 0.005


class OrderItem(BaseModel):
    image: str | None = None
    title: str
    price: float = Field(ge=0, allow_inf_nan=False)
    quantity: int = Field(ge=1)

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError('Item title is required.')
        return value

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@dataclass(frozen=True)
class PlacedOrder:
    order_id: int
    owner_email: str
    items: list[OrderItem]
    total: float
    created_at: datetime


@dataclass(frozen=True)
class StoredOrder:
    order_id: int
    items: list[OrderItem]
    total: float
    created_at: datetime


def compute_total(items: list[OrderItem]) -> float:
    return round(sum(item.line_total for item in items), 2)


def serialize_items(items: list[OrderItem]) -> str:
    return json.dumps([item.model_dump() for item in items])


def deserialize_items(raw: str) -> list[OrderItem]:
    return [OrderItem.model_validate(entry) for entry in json.loads(raw)]


def _validate_total(total: float | None) -> float:
    if total is None or isinstance(total, bool):
        raise InvalidTotal()
    try:
        value = float(total)
    except (TypeError, ValueError) as exc:
        raise InvalidTotal() from exc
    if not math.isfinite(value) or value < 0:
        raise InvalidTotal()
    return value


def place_order(db: Session, user_id: int, items: list[OrderItem] | None, total: float | None) -> PlacedOrder:
    if not items:
        raise EmptyCart()
    order_total = _validate_total(total)

    expected_total = compute_total(items)
    if abs(expected_total - order_total) > TOTAL_TOLERANCE:
        logger.warning(
            'Order total %.2f from user %s does not match item sum %.2f; storing submitted total.',
            order_total,
            user_id,
            expected_total,
        )

    try:
        owner = db.get(User, user_id)
        if owner is None:
            raise OwnerMissing()
        owner_email = owner.email

        order = Order(user_id=owner.id, items=serialize_items(items), total=order_total)
        db.add(order)
        db.commit()
        db.refresh(order)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to record order for user %s.', user_id)
        raise StoreError('Order placement failed') from exc

    logger.info('Recorded order %s for user %s (%d items, total %.2f)', order.id, user_id, len(items), order_total)
    return PlacedOrder(
        order_id=order.id,
        owner_email=owner_email,
        items=list(items),
        total=order_total,
        created_at=order.created_at,
    )


def list_orders(db: Session, user_id: int) -> list[StoredOrder]:
    try:
        rows = (
            db.query(Order)
            .filter(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )
    except SQLAlchemyError as exc:
        logger.exception('Failed to load orders for user %s.', user_id)
        raise StoreError() from exc

    return [
        StoredOrder(
            order_id=row.id,
            items=deserialize_items(row.items),
            total=row.total,
            created_at=row.created_at,
        )
        for row in rows
    ]
