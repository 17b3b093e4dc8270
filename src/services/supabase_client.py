"""Supabase client wrapper with async context manager support."""

import os
from typing import Optional
from supabase import create_client, Client
from supabase.client import ClientOptions
from src.utils.errors import SupabaseError
import logging

logger = logging.getLogger(__name__)

SELLERS_TABLE = "sellers"
BUYERS_TABLE = "buyers"
MESSAGES_TABLE = "messages"
SELLER_IMAGES_BUCKET = os.environ.get("SELLER_IMAGES_BUCKET", "seller-images")

# Global client instance (singleton pattern)
_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create Supabase client singleton."""
    global _client

    if _client is None:
        url = os.environ.get("SUPABASE_URL")
        key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY")

        if not url or not key:
            raise SupabaseError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        )

        _client = create_client(url, key, options)
        logger.info("Supabase client initialized", extra={"url": url})

    return _client


class SupabaseClient:
    """Async context manager for Supabase client."""

    def __init__(self):
        self.client: Optional[Client] = None

    async def __aenter__(self) -> Client:
        self.client = get_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.error(
                "Supabase operation error",
                extra={"error": str(exc_val), "type": exc_type.__name__}
            )
        return False


# Auth
async def get_session_user(access_token: Optional[str]) -> Optional[dict]:
    """Resolve the user behind a session access token. None when there is no session."""
    if not access_token:
        return None

    async with SupabaseClient() as client:
        try:
            response = client.auth.get_user(access_token)
        except Exception as e:
            raise SupabaseError(f"Failed to get session user: {e}")

        user = getattr(response, "user", None) if response else None
        if user is None:
            return None
        return {"id": str(user.id), "email": user.email}


# Sellers table operations (listings)
async def get_seller_listing(listing_id: str) -> Optional[dict]:
    """Get listing by ID."""
    async with SupabaseClient() as client:
        try:
            result = client.table(SELLERS_TABLE).select("*").eq("id", listing_id).limit(1).execute()
            return result.data[0] if result.data and len(result.data) > 0 else None
        except Exception as e:
            raise SupabaseError(f"Failed to get listing: {e}")


async def create_seller_listing(listing_data: dict) -> dict:
    """Create a new listing."""
    async with SupabaseClient() as client:
        try:
            result = client.table(SELLERS_TABLE).insert(listing_data).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to create listing: {e}")
        if result.data and len(result.data) > 0:
            return result.data[0]
        raise SupabaseError("Failed to create listing: no data returned")


async def update_seller_listing(listing_id: str, updates: dict) -> dict:
    """Update a listing."""
    async with SupabaseClient() as client:
        try:
            result = client.table(SELLERS_TABLE).update(updates).eq("id", listing_id).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to update listing: {e}")
        if result.data and len(result.data) > 0:
            return result.data[0]
        raise SupabaseError(f"Failed to update listing: {listing_id} not found")


# Buyers table operations
async def get_buyer_by_email(email: str) -> Optional[dict]:
    """Get buyer profile by email."""
    async with SupabaseClient() as client:
        try:
            result = client.table(BUYERS_TABLE).select("*").eq("email", email).limit(1).execute()
            return result.data[0] if result.data and len(result.data) > 0 else None
        except Exception as e:
            raise SupabaseError(f"Failed to get buyer profile: {e}")


# Messages table operations
async def insert_message(message_data: dict) -> dict:
    """Insert a buyer inquiry."""
    async with SupabaseClient() as client:
        try:
            result = client.table(MESSAGES_TABLE).insert([message_data]).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to insert message: {e}")
        if result.data and len(result.data) > 0:
            return result.data[0]
        raise SupabaseError("Failed to insert message: no data returned")


# Storage operations
async def upload_storage_object(
    path: str,
    content: bytes,
    content_type: Optional[str] = None,
    bucket: str = SELLER_IMAGES_BUCKET,
) -> None:
    """Upload a blob under ``path`` in ``bucket``."""
    async with SupabaseClient() as client:
        try:
            client.storage.from_(bucket).upload(
                path,
                content,
                {"content-type": content_type or "application/octet-stream"},
            )
        except Exception as e:
            raise SupabaseError(f"Failed to upload {path}: {e}")


async def get_storage_public_url(path: str, bucket: str = SELLER_IMAGES_BUCKET) -> str:
    """Public URL for an object in ``bucket``."""
    async with SupabaseClient() as client:
        try:
            return client.storage.from_(bucket).get_public_url(path)
        except Exception as e:
            raise SupabaseError(f"Failed to get public URL for {path}: {e}")
