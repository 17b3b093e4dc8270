"""Buyer profile and session models."""

from typing import Optional
from pydantic import BaseModel, Field


class SessionUser(BaseModel):
    """Authenticated user resolved from a session access token."""
    id: str = Field(..., description="Auth user ID")
    email: Optional[str] = Field(None, description="Email address")


class BuyerProfile(BaseModel):
    """Prospective purchaser, keyed by email."""
    id: Optional[str] = None
    email: str = Field(..., description="Email address")
    name: str = Field(..., description="Display name")
    phone: Optional[str] = Field(None, description="Phone number")
    created_at: Optional[str] = None
