"""Pydantic schemas for premium activation and status."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ActivateRequest(BaseModel):
    """Request model for redeeming a premium key."""
    key: str


class ActivateResponse(BaseModel):
    """Response model for key redemption; failures carry only a generic error."""
    ok: bool
    expiry_date: Optional[datetime] = None
    error: Optional[str] = None


class PremiumStatusResponse(BaseModel):
    """Response model for the caller's premium status."""
    authorized: bool
    owner: Optional[str] = None
    expiry_date: Optional[datetime] = None
