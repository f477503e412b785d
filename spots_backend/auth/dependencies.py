"""
FastAPI dependency functions for scheduler authorization.

Scheduler-triggered endpoints (cron jobs) are authorized with a shared
secret sent as a bearer token:

    Authorization: Bearer <CRON_SECRET>

User authentication and sessions are handled by a separate auth service and
are not verified here.
"""

import hmac
import logging
from typing import Annotated

from fastapi import Header

from spots_backend.config import settings
from spots_backend.utils.errors import AuthorizationError

logger = logging.getLogger(__name__)


async def verify_cron_secret(authorization: Annotated[str | None, Header()] = None) -> None:
    """
    Verify the scheduler's shared secret.

    This is a FastAPI dependency that:
    1. Reads the Authorization header
    2. Compares it byte-for-byte with "Bearer <CRON_SECRET>" in constant time
    3. Raises before the endpoint body runs, so a rejected call does no work

    Fails closed: if CRON_SECRET is not configured every call is rejected.

    Raises:
        AuthorizationError: 401 if the secret is unset, the header is
            missing, or the header does not match
    """
    secret = settings.CRON_SECRET
    if not secret:
        logger.warning("CRON_SECRET not configured; rejecting scheduler call")
        raise AuthorizationError("Scheduler secret is not configured")

    if not authorization:
        logger.warning("Missing Authorization header on scheduler call")
        raise AuthorizationError("Missing Authorization header")

    expected = f"Bearer {secret}".encode("utf-8")
    if not hmac.compare_digest(authorization.encode("utf-8"), expected):
        logger.warning("Invalid scheduler secret")
        raise AuthorizationError("Invalid scheduler secret")
