"""
Supabase client factory.

The only table this service writes is the trending-city snapshot, which is
global (not user-scoped) data refreshed by the scheduler. That write uses a
server-side secret key and therefore bypasses Row Level Security.

CRITICAL SECURITY RULES:
1. NEVER use this client for user-initiated requests
2. NEVER expose SUPABASE_SECRET_KEY to clients or logs
"""

import logging
from typing import Optional

from spots_backend.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)


def get_service_client() -> Optional[Client]:
    """
    Create a Supabase client with server-side privileges.

    Returns:
        A Supabase client, or None when SUPABASE_URL / SUPABASE_SECRET_KEY
        are not configured (the trending snapshot then lives in memory only).
    """
    if not settings.has_supabase:
        logger.info("Supabase not configured; trending snapshot will not be persisted")
        return None

    client: Client = create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_SECRET_KEY
    )

    logger.debug("Created Supabase service client for trending snapshot")

    return client
