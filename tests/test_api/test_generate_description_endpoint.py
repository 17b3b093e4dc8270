"""Tests for the AI description endpoint."""

import pytest
from unittest.mock import patch

from api.generate_description import handler
from src.utils.errors import DescriptionError
from tests.utils.helpers import invoke_handler

GENERATE = "api.generate_description.generate_listing_description"


@pytest.mark.unit
def test_returns_description():
    body = {
        "summary": "Corner bakery",
        "customers": "Commuters",
        "opportunity": "Wholesale",
        "uniqueEdge": "Sourdough",
        "industry": "bakery",
        "location": "Austin, Texas",
    }
    with patch(GENERATE, return_value="A beloved bakery.") as generate:
        response = invoke_handler(handler, "POST", "/api/generate_description", body)

    assert response.status == 200
    assert response.body == {"description": "A beloved bakery."}
    request = generate.call_args.args[0]
    assert request.unique_edge == "Sourdough"
    assert request.location == "Austin, Texas"


@pytest.mark.unit
def test_accepts_sentence_summary_key():
    with patch(GENERATE, return_value="Text") as generate:
        invoke_handler(handler, "POST", "/api/generate_description", {"sentenceSummary": "Corner bakery"})

    assert generate.call_args.args[0].summary == "Corner bakery"


@pytest.mark.unit
def test_echoes_correlation_id():
    with patch(GENERATE, return_value="Text"):
        response = invoke_handler(
            handler, "POST", "/api/generate_description", {"summary": "x"},
            headers={"X-Correlation-ID": "req_client123"},
        )

    assert response.headers["X-Correlation-ID"] == "req_client123"


@pytest.mark.unit
def test_invalid_json_is_rejected():
    with patch(GENERATE) as generate:
        response = invoke_handler(handler, "POST", "/api/generate_description", "{not json")

    assert response.status == 400
    assert response.body == {"message": "Invalid request body"}
    generate.assert_not_called()


@pytest.mark.unit
def test_generation_failure_returns_message():
    with patch(GENERATE, side_effect=DescriptionError("ANTHROPIC_API_KEY not set")):
        response = invoke_handler(handler, "POST", "/api/generate_description", {"summary": "x"})

    assert response.status == 500
    assert response.body == {"message": "ANTHROPIC_API_KEY not set"}


@pytest.mark.unit
def test_get_not_allowed():
    assert invoke_handler(handler, "GET", "/api/generate_description").status == 405
