"""Tests for the Supabase helper functions."""

import pytest
from unittest.mock import MagicMock

from src.services import supabase_client
from src.services.supabase_client import (
    create_seller_listing,
    get_buyer_by_email,
    get_seller_listing,
    get_session_user,
    get_storage_public_url,
    insert_message,
    update_seller_listing,
    upload_storage_object,
)
from src.utils.errors import SupabaseError
from tests.fixtures.supabase_responses import auth_user, query_result, select_chain


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_seller_listing_returns_first_row(mock_supabase_client, seller_row):
    query = select_chain(mock_supabase_client, seller_row)

    row = await get_seller_listing(seller_row["id"])

    assert row == seller_row
    mock_supabase_client.table.assert_called_with("sellers")
    mock_supabase_client.table.return_value.select.return_value.eq.assert_called_with("id", seller_row["id"])
    query.execute.assert_called_once()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_seller_listing_missing(mock_supabase_client):
    select_chain(mock_supabase_client)

    assert await get_seller_listing("missing") is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_query_failure_raises_supabase_error(mock_supabase_client):
    mock_supabase_client.table.side_effect = RuntimeError("connection reset")

    with pytest.raises(SupabaseError, match="connection reset"):
        await get_buyer_by_email("buyer@example.com")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_buyer_by_email(mock_supabase_client, buyer_row):
    select_chain(mock_supabase_client, buyer_row)

    row = await get_buyer_by_email(buyer_row["email"])

    assert row == buyer_row
    mock_supabase_client.table.assert_called_with("buyers")
    mock_supabase_client.table.return_value.select.return_value.eq.assert_called_with("email", buyer_row["email"])


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_and_update_listing(mock_supabase_client, seller_row):
    table = mock_supabase_client.table.return_value
    table.insert.return_value.execute.return_value = query_result(seller_row)
    table.update.return_value.eq.return_value.execute.return_value = query_result(seller_row)

    assert await create_seller_listing({"name": "Dana"}) == seller_row
    table.insert.assert_called_once_with({"name": "Dana"})

    assert await update_seller_listing(seller_row["id"], {"name": "Dana"}) == seller_row
    table.update.return_value.eq.assert_called_once_with("id", seller_row["id"])


@pytest.mark.unit
@pytest.mark.asyncio
async def test_update_unknown_listing(mock_supabase_client):
    table = mock_supabase_client.table.return_value
    table.update.return_value.eq.return_value.execute.return_value = query_result()

    with pytest.raises(SupabaseError, match="not found"):
        await update_seller_listing("missing", {"name": "Dana"})


@pytest.mark.unit
@pytest.mark.asyncio
async def test_insert_message(mock_supabase_client):
    row = {"buyer_email": "b@example.com", "buyer_name": "B", "message": "Hi", "seller_id": "l-1"}
    table = mock_supabase_client.table.return_value
    table.insert.return_value.execute.return_value = query_result({"id": "m-1", **row})

    saved = await insert_message(row)

    assert saved["id"] == "m-1"
    mock_supabase_client.table.assert_called_with("messages")
    table.insert.assert_called_once_with([row])


@pytest.mark.unit
@pytest.mark.asyncio
async def test_session_user(mock_supabase_client):
    mock_supabase_client.auth.get_user.return_value = auth_user("u-1", "buyer@example.com")

    assert await get_session_user("token") == {"id": "u-1", "email": "buyer@example.com"}
    assert await get_session_user(None) is None
    mock_supabase_client.auth.get_user.assert_called_once_with("token")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_session_user_without_user(mock_supabase_client):
    mock_supabase_client.auth.get_user.return_value = MagicMock(user=None)

    assert await get_session_user("token") is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_storage_upload_and_public_url(mock_supabase_client):
    bucket = mock_supabase_client.storage.from_.return_value
    bucket.get_public_url.return_value = "https://cdn.test/seller-images/a.jpg"

    await upload_storage_object("a.jpg", b"data", "image/jpeg")
    url = await get_storage_public_url("a.jpg")

    mock_supabase_client.storage.from_.assert_called_with("seller-images")
    bucket.upload.assert_called_once_with("a.jpg", b"data", {"content-type": "image/jpeg"})
    assert url == "https://cdn.test/seller-images/a.jpg"


@pytest.mark.unit
def test_client_requires_credentials(monkeypatch):
    monkeypatch.setattr(supabase_client, "_client", None)
    monkeypatch.delenv("SUPABASE_URL", raising=False)

    with pytest.raises(SupabaseError, match="must be set"):
        supabase_client.get_supabase_client()
