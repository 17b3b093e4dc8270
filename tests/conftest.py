"""Shared pytest fixtures and configuration."""

import os
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("MARKETPLACE_API_URL", "http://marketplace.test")
os.environ.setdefault("LLM_PROVIDER", "anthropic")
os.environ.setdefault("LLM_MODEL", "claude-sonnet-4-20250514")
os.environ.setdefault("LOG_FORMAT", "text")

from tests.utils.factories import (  # noqa: E402
    create_buyer_data,
    create_draft,
    create_seller_listing_data,
)


@pytest.fixture
def mock_supabase_client():
    """Patch the Supabase singleton with a MagicMock client."""
    client = MagicMock()
    with patch("src.services.supabase_client.get_supabase_client", return_value=client):
        yield client


@pytest.fixture
def seller_row():
    return create_seller_listing_data()


@pytest.fixture
def buyer_row():
    return create_buyer_data()


@pytest.fixture
def complete_draft():
    """A draft that has been filled in through all three steps."""
    return create_draft(
        name="Dana Seller",
        email="dana@example.com",
        business_name="Main Street Bakery",
        industry="bakery",
        location_city="Austin",
        location_state="Texas",
        asking_price="250000.5",
        annual_revenue="480000",
        employees="6",
        business_description="Family bakery with a loyal morning crowd.",
        sentence_summary="Neighborhood bakery open since 1998.",
        customers="Commuters and local cafes",
        growth_potential="Wholesale to grocery chains",
        customer_love="Sourdough baked before dawn",
    )


@pytest.fixture
def mock_listing_api():
    """Stand-in for ListingApiClient."""
    api = MagicMock()
    api.generate_description = AsyncMock(return_value="A beloved neighborhood bakery.")
    api.save_listing = AsyncMock(return_value={"id": "listing-1"})
    return api


@pytest.fixture
def mock_uploader():
    """Stand-in for ImageUploader returning predictable public URLs."""
    uploader = MagicMock()

    async def upload(image):
        return f"https://cdn.test/seller-images/{image.filename}"

    uploader.upload = AsyncMock(side_effect=upload)
    return uploader
