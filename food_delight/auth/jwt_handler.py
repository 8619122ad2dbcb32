from datetime import datetime, timedelta, timezone

import jwt

from food_delight.core import config
from food_delight.core.errors import ExpiredToken, MalformedToken, MissingToken


def _now(now: datetime | None) -> datetime:
    return (now or datetime.now(timezone.utc)).replace(microsecond=0)


def create_access_token(user_id: int, now: datetime | None = None, expires_minutes: int | None = None) -> str:
    expire_minutes = expires_minutes or config.JWT_EXPIRES_MINUTES
    issued_at = _now(now)
    expire = issued_at + timedelta(minutes=expire_minutes)
    payload = {"sub": str(user_id), "iat": issued_at, "exp": expire}
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    # Expiry is checked by validate_access_token against an injectable clock.
    return jwt.decode(
        token,
        config.JWT_SECRET_KEY,
        algorithms=[config.JWT_ALGORITHM],
        options={"verify_exp": False, "verify_iat": False, "require": ["sub", "iat", "exp"]},
    )


def validate_access_token(token: str | None, now: datetime | None = None) -> int:
    if not token or not token.strip():
        raise MissingToken()

    try:
        payload = decode_access_token(token.strip())
    except jwt.InvalidTokenError as exc:
        raise MalformedToken() from exc

    try:
        user_id = int(payload["sub"])
        expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
    except (TypeError, ValueError) as exc:
        raise MalformedToken() from exc

    if _now(now) >= expires_at:
        raise ExpiredToken()
    return user_id
