"""HTTP client for the description and listing endpoints."""

import os
from typing import Optional
import httpx

from src.models.description import DescriptionRequest, DescriptionResponse
from src.utils.errors import DescriptionError, ListingApiError
from src.utils.logging import get_correlation_id, get_structured_logger
from src.utils.logging_config import LoggingConfig

logger = get_structured_logger(__name__)

MARKETPLACE_API_URL = os.environ.get("MARKETPLACE_API_URL", "http://localhost:3000")
DESCRIPTION_PATH = "/api/generate_description"
SUBMIT_LISTING_PATH = "/api/submit_seller_listing"
UPDATE_LISTING_PATH = "/api/update_seller_listing"


def _error_message(response: httpx.Response, key: str) -> Optional[str]:
    """Pull ``key`` out of a JSON error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get(key):
        return str(body[key])
    return None


class ListingApiClient:
    """Calls the serverless endpoints. No retries, no timeouts beyond httpx defaults."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or MARKETPLACE_API_URL
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {}
        correlation_id = get_correlation_id()
        if correlation_id:
            headers[LoggingConfig.LOG_CORRELATION_ID_HEADER] = correlation_id
        return httpx.AsyncClient(base_url=self.base_url, transport=self.transport, headers=headers)

    async def generate_description(self, request: DescriptionRequest) -> str:
        """POST the seller answers and return the generated description."""
        async with self._client() as client:
            try:
                response = await client.post(DESCRIPTION_PATH, json=request.model_dump(by_alias=True))
            except httpx.HTTPError as e:
                raise DescriptionError(f"Description request failed: {e}") from e

        if response.is_error:
            message = _error_message(response, "message") or f"HTTP {response.status_code}"
            raise DescriptionError(message)

        try:
            return DescriptionResponse.model_validate(response.json()).description
        except ValueError as e:
            raise DescriptionError(f"Malformed description response: {e}") from e

    async def save_listing(self, payload: dict, listing_id: Optional[str] = None) -> dict:
        """Create the listing, or update it when ``listing_id`` is given."""
        async with self._client() as client:
            if listing_id:
                response = await client.put(UPDATE_LISTING_PATH, params={"id": listing_id}, json=payload)
            else:
                response = await client.post(SUBMIT_LISTING_PATH, json=payload)

        if response.is_error:
            message = _error_message(response, "error") or "Server error"
            logger.warning(
                "Listing endpoint returned an error",
                status_code=response.status_code,
                listing_id=listing_id,
                error=message,
            )
            raise ListingApiError(message, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
