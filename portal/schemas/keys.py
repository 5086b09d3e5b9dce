"""Pydantic schemas for premium key administration."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from common.types import PremiumKey


class GenerateKeyRequest(BaseModel):
    """Request model for issuing a premium key."""
    duration_days: int = Field(..., gt=0, le=36500)
    owner: str = Field(..., min_length=1, max_length=200)


class PremiumKeyResponse(BaseModel):
    """Response model for a premium key."""
    key: str
    owner: str
    created_at: datetime
    expiry_date: datetime

    @classmethod
    def from_key(cls, premium_key: PremiumKey) -> "PremiumKeyResponse":
        return cls(
            key=premium_key.key,
            owner=premium_key.owner,
            created_at=premium_key.created_at,
            expiry_date=premium_key.expiry_date,
        )


class ListKeysResponse(BaseModel):
    """Response model for key listing."""
    keys: List[PremiumKeyResponse]


class DeleteKeyResponse(BaseModel):
    """Response model for key deletion."""
    deleted: bool
