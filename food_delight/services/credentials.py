import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from food_delight.auth.passwords import hash_password, verify_password
from food_delight.core.errors import BadCredentials, DuplicateEmail, InvalidInput, NotFound, StoreError
from food_delight.models.user import User

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS_MESSAGE = 'Email and password are required'


def normalize_email(email: str | None) -> str:
    return (email or '').strip().lower()


def _require_credentials(email: str | None, password: str | None) -> str:
    normalized = normalize_email(email)
    if not normalized or not password:
        raise InvalidInput(MISSING_CREDENTIALS_MESSAGE)
    return normalized


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def register(db: Session, email: str | None, password: str | None) -> int:
    normalized = _require_credentials(email, password)

    try:
        if find_user_by_email(db, normalized) is not None:
            raise DuplicateEmail()

        user = User(email=normalized, password_hash=hash_password(password))
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError as exc:
        # A concurrent registration won the unique constraint.
        db.rollback()
        raise DuplicateEmail() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to register user.')
        raise StoreError() from exc

    logger.info('Registered user %s', user.id)
    return user.id


def verify(db: Session, email: str | None, password: str | None) -> User:
    normalized = _require_credentials(email, password)

    try:
        user = find_user_by_email(db, normalized)
    except SQLAlchemyError as exc:
        logger.exception('Failed to look up user for login.')
        raise StoreError() from exc

    if user is None:
        raise NotFound()
    if not verify_password(password, user.password_hash):
        raise BadCredentials()
    return user
