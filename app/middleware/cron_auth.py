"""Shared-secret authentication for the scheduled reset trigger."""
from fastapi import HTTPException, Request, status
from typing import Optional
import hmac
import os

SECRET_ENV_VARS = ("CRON_SECRET", "CRON_SECRET_TOKEN", "VERCEL_CRON_SECRET")


def get_cron_secret() -> Optional[str]:
    """Return the configured trigger secret, or None when the trigger is open."""
    for name in SECRET_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None


async def verify_cron_secret(request: Request) -> None:
    """
    Reject the request unless it carries the trigger secret.

    The secret is accepted as `Authorization: Bearer <secret>` or as the
    `secret` query parameter. With no secret configured every call passes.

    Raises:
        HTTPException: 401 if the credential is missing or wrong
    """
    expected = get_cron_secret()
    if not expected:
        return

    provided = None
    auth_header = request.headers.get("authorization")
    if auth_header and auth_header.startswith("Bearer "):
        provided = auth_header[7:]  # Remove "Bearer " prefix
    if not provided:
        provided = request.query_params.get("secret")

    if not provided or not hmac.compare_digest(provided.encode(), expected.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
