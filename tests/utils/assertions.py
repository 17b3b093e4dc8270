"""Custom assertion helpers."""

import math
from typing import Any, Dict

from src.services.payload import AMOUNT_FIELDS, COUNT_FIELDS


def assert_numeric_payload(payload: Dict[str, Any]) -> None:
    """Every numeric payload field is a finite number, never None or NaN."""
    for key in list(AMOUNT_FIELDS.values()) + list(COUNT_FIELDS.values()):
        value = payload[key]
        assert isinstance(value, (int, float)) and not isinstance(value, bool), key
        assert math.isfinite(value), key
    for key in COUNT_FIELDS.values():
        assert isinstance(payload[key], int), key


def assert_single_canonical_description(payload: Dict[str, Any]) -> None:
    """Only the chosen description variant is populated."""
    if payload["description_choice"] == "manual":
        assert payload["ai_description"] == ""
    else:
        assert payload["original_description"] == ""
