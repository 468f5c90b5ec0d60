"""JWT authentication for the task routes."""
from fastapi import HTTPException, status, Request
from jose import jwt, JWTError
from pydantic import BaseModel
from typing import Optional
import os

JWT_SECRET = os.environ.get("BETTER_AUTH_SECRET", "change-me-in-production")
JWT_ALGORITHM = "HS256"


class CurrentUser(BaseModel):
    """User information extracted from JWT."""
    user_id: str
    email: Optional[str] = None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(request: Request) -> CurrentUser:
    """
    Validate the JWT from the Authorization header.

    Args:
        request: FastAPI request object to extract Authorization header

    Returns:
        CurrentUser with user_id and email from token

    Raises:
        HTTPException: If token is missing, invalid or expired
    """
    auth_header = request.headers.get("authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise _unauthorized("Missing or invalid Authorization header")

    token = auth_header[7:]  # Remove "Bearer " prefix

    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except JWTError as e:
        raise _unauthorized(f"Invalid token: {str(e)}")

    user_id: Optional[str] = payload.get("sub")
    if user_id is None:
        raise _unauthorized("Invalid token: missing user ID")

    return CurrentUser(user_id=user_id, email=payload.get("email"))


def ensure_same_user(user_id: str, current_user: CurrentUser) -> None:
    """Raise 403 unless the path user is the authenticated user."""
    if user_id != current_user.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to access this user's resources"
        )
