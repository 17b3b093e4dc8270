"""Listing description generation using LangChain chat models."""

import os
import time

from langchain_anthropic import ChatAnthropic
from langchain_openai import ChatOpenAI

from src.models.description import DescriptionRequest
from src.utils.errors import DescriptionError
from src.utils.logging import get_structured_logger, sanitize_message_text

logger = get_structured_logger(__name__)

SYSTEM_PROMPT = """You write listings for a marketplace where owners sell small businesses.
Write from the seller's answers only. Never invent revenue, staff counts, awards or other facts.
Keep the business name out of the text; some sellers list confidentially.
Return plain prose: two or three short paragraphs, no headings, no bullet points, no markdown."""


def build_description_prompt(request: DescriptionRequest) -> str:
    """Render the seller answers into the user prompt."""
    answers = [
        ("One-sentence summary", request.summary),
        ("Industry", request.industry),
        ("Location", request.location),
        ("Customers", request.customers),
        ("Growth opportunity", request.opportunity),
        ("What sets it apart", request.unique_edge),
    ]
    lines = [f"- {label}: {value.strip()}" for label, value in answers if value and value.strip()]

    return f"""{SYSTEM_PROMPT}

Seller answers:
{chr(10).join(lines)}

Write the listing description."""


def get_llm_model():
    """Get configured LLM model."""
    provider = os.environ.get("LLM_PROVIDER", "anthropic").lower()
    model_name = os.environ.get("LLM_MODEL", "claude-sonnet-4-20250514")

    if provider == "anthropic":
        api_key = os.environ.get("ANTHROPIC_API_KEY")
        if not api_key:
            raise DescriptionError("ANTHROPIC_API_KEY not set")
        return ChatAnthropic(model=model_name, api_key=api_key)
    elif provider == "openai":
        api_key = os.environ.get("OPENAI_API_KEY")
        if not api_key:
            raise DescriptionError("OPENAI_API_KEY not set")
        return ChatOpenAI(model=model_name, api_key=api_key)
    else:
        raise DescriptionError(f"Unsupported LLM provider: {provider}")


def _response_text(response) -> str:
    content = response.content if hasattr(response, "content") else response
    if isinstance(content, list):
        # Anthropic may return content blocks
        content = "".join(
            block.get("text", "") if isinstance(block, dict) else str(block)
            for block in content
        )
    return str(content).strip()


def generate_listing_description(request: DescriptionRequest) -> str:
    """Turn seller answers into marketing prose."""
    if request.is_empty():
        raise DescriptionError("No seller answers to describe")

    prompt = build_description_prompt(request)
    model = get_llm_model()

    logger.info(
        "Description generation started",
        industry=request.industry,
        location=request.location,
        prompt_size_chars=len(prompt),
    )

    llm_start_time = time.time()
    try:
        response = model.invoke(prompt)
    except Exception as e:
        raise DescriptionError(f"LLM request failed: {e}") from e

    description = _response_text(response)
    if not description:
        raise DescriptionError("LLM returned an empty description")

    logger.info(
        "Description generated",
        llm_latency_ms=round((time.time() - llm_start_time) * 1000, 2),
        description_length=len(description),
        description_preview=sanitize_message_text(description, max_length=100),
    )
    return description
