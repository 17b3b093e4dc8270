"""Buyer-to-seller inquiry message."""

from typing import Optional
from pydantic import BaseModel, Field


class Message(BaseModel):
    """Row of the ``messages`` table. Append only."""
    id: Optional[str] = None
    buyer_email: str = Field(..., description="Sender buyer email")
    buyer_name: str = Field(..., description="Sender buyer name")
    message: str = Field(..., min_length=1, description="Inquiry body")
    seller_id: str = Field(..., description="Target listing ID")
    created_at: Optional[str] = None

    def to_row(self) -> dict:
        return self.model_dump(exclude={"id", "created_at"})
