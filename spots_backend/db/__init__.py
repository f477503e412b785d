"""
Database access layer for the Spots backend.

Includes:
- Supabase client initialization for the trending-city snapshot

User, collection and review storage is owned by other services and is not
accessed from here.
"""

from .client import get_service_client

__all__ = ["get_service_client"]
