"""Shared data type definitions (PremiumKey, Session, MovieRecord)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List


@dataclass(frozen=True)
class PremiumKey:
    """
    Administrator-issued credential redeemable for a premium session.
    """
    key: str
    created_at: datetime
    owner: str
    expiry_date: datetime

    def is_valid_at(self, moment: datetime) -> bool:
        return self.expiry_date > moment

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "created_at": self.created_at.isoformat(),
            "owner": self.owner,
            "expiry_date": self.expiry_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PremiumKey":
        return cls(
            key=data["key"],
            created_at=datetime.fromisoformat(data["created_at"]),
            owner=data.get("owner", ""),
            expiry_date=datetime.fromisoformat(data["expiry_date"]),
        )


@dataclass(frozen=True)
class Session:
    """
    Server-held binding from a bearer token to a redeemed premium key.
    """
    session_token: str
    premium_key: str

    def to_dict(self) -> Dict[str, Any]:
        return {"session_token": self.session_token, "premium_key": self.premium_key}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        return cls(session_token=data["session_token"], premium_key=data["premium_key"])


@dataclass(frozen=True)
class MovieRecord:
    """
    A catalog entry.
    """
    slug: str
    title: str
    poster_url: str = ""
    synopsis: str = ""
    links: List[str] = field(default_factory=list)
    screenshots: List[str] = field(default_factory=list)
    premium: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slug": self.slug,
            "title": self.title,
            "poster_url": self.poster_url,
            "synopsis": self.synopsis,
            "links": list(self.links),
            "screenshots": list(self.screenshots),
            "premium": self.premium,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MovieRecord":
        return cls(
            slug=data["slug"],
            title=data.get("title", ""),
            poster_url=data.get("poster_url", ""),
            synopsis=data.get("synopsis", ""),
            links=list(data.get("links") or []),
            screenshots=list(data.get("screenshots") or []),
            premium=bool(data.get("premium", False)),
        )
