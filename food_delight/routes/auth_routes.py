import logging

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from food_delight.auth import jwt_handler
from food_delight.database import get_db
from food_delight.services import credentials

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)


class CredentialsRequest(BaseModel):
    # Presence is checked by the credential service so a missing field
    # gets the same message as a blank one.
    email: str | None = None
    password: str | None = None


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str


@router.post('/register', response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(payload: CredentialsRequest, db: Session = Depends(get_db)):
    credentials.register(db, payload.email, payload.password)
    return MessageResponse(message='User registered successfully')


@router.post('/login', response_model=TokenResponse)
def login(payload: CredentialsRequest, db: Session = Depends(get_db)):
    user = credentials.verify(db, payload.email, payload.password)
    token = jwt_handler.create_access_token(user.id)
    logger.info('Login successful for user %s', user.id)
    return TokenResponse(token=token)
