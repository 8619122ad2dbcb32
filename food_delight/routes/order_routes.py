import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from food_delight.auth.dependencies import get_current_user_id
from food_delight.core.errors import InvalidInput, SendFailure
from food_delight.database import get_db
from food_delight.services import notifications, orders
from food_delight.services.orders import OrderItem

router = APIRouter(tags=['orders'])

logger = logging.getLogger(__name__)

ORDER_PLACED_MESSAGE = 'Order placed successfully, confirmation email sent'
ORDER_PLACED_EMAIL_FAILED_MESSAGE = 'Order placed successfully, but the confirmation email could not be sent'


class PlaceOrderRequest(BaseModel):
    items: list[OrderItem] | None = None
    total: float | None = None


class PlaceOrderResponse(BaseModel):
    message: str
    order_id: int
    email_sent: bool


class OrderResponse(BaseModel):
    id: int
    items: list[OrderItem]
    total: float
    order_date: datetime


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]


async def read_place_order_request(
    request: Request,
    user_id: int = Depends(get_current_user_id),
) -> PlaceOrderRequest:
    # Depending on the auth check keeps the body unread until the caller is known.
    try:
        body = await request.json()
    except ValueError as exc:
        raise InvalidInput() from exc

    try:
        return PlaceOrderRequest.model_validate(body)
    except ValidationError as exc:
        errors = [{**error, 'loc': ('body', *error['loc'])} for error in exc.errors()]
        raise RequestValidationError(errors, body=body) from exc


@router.post('/place-order', response_model=PlaceOrderResponse)
def place_order(
    user_id: int = Depends(get_current_user_id),
    payload: PlaceOrderRequest = Depends(read_place_order_request),
    db: Session = Depends(get_db),
):
    placed = orders.place_order(db, user_id, payload.items, payload.total)

    # The order is committed at this point; mail failures only degrade the response.
    try:
        notifications.send_confirmation(placed.owner_email, placed.items, placed.total)
    except SendFailure as exc:
        logger.warning('Order %s placed but confirmation email failed: %s', placed.order_id, exc.message)
        return PlaceOrderResponse(
            message=ORDER_PLACED_EMAIL_FAILED_MESSAGE,
            order_id=placed.order_id,
            email_sent=False,
        )

    return PlaceOrderResponse(message=ORDER_PLACED_MESSAGE, order_id=placed.order_id, email_sent=True)


@router.get('/orders', response_model=OrderListResponse)
def list_my_orders(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    stored = orders.list_orders(db, user_id)
    return OrderListResponse(
        orders=[
            OrderResponse(id=order.order_id, items=order.items, total=order.total, order_date=order.created_at)
            for order in stored
        ]
    )
