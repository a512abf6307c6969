"""Data models for books and wishlist entries."""
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, List, Dict, Any


class Tab(str, Enum):
    """Mutually exclusive views."""
    SEARCH = "search"
    WISHLIST = "wishlist"


class StarState(str, Enum):
    """One position of a five-star rating."""
    FILLED = "filled"
    HALF = "half"
    EMPTY = "empty"


@dataclass
class BookSummary:
    """Book as returned by the search endpoint."""
    id: Optional[str]
    title: str
    authors: List[str] = field(default_factory=list)
    thumbnail: Optional[str] = None
    small_thumbnail: Optional[str] = None
    average_rating: Optional[float] = None
    ratings_count: Optional[int] = None

    @property
    def authors_str(self) -> str:
        """Format authors as comma-separated string."""
        return ", ".join(self.authors)


@dataclass
class WishlistItem:
    """Flattened book as stored by the wishlist endpoints."""
    title: str
    authors: str = ""
    thumbnail: str = ""
    rating: float = 0
    ratings_count: int = 0
    id: Optional[Any] = None

    def to_payload(self) -> Dict[str, Any]:
        """Request body for the add call (server assigns the id)."""
        payload = asdict(self)
        payload.pop("id")
        return payload


@dataclass(frozen=True)
class DisplayBook:
    """Single record the views render, whatever the source shape."""
    title: str
    authors_text: str
    thumbnail_url: Optional[str]
    rating: float
    ratings_count: int
