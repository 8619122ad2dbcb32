from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from food_delight.auth import jwt_handler

security = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> int:
    # A missing header or a non-bearer scheme both arrive here as None.
    token = credentials.credentials if credentials else None
    return jwt_handler.validate_access_token(token)
