"""Parse and normalize book search and wishlist payloads."""
import logging
import math
from typing import Dict, Any, List, Optional, Union

from booksearch.models import BookSummary, WishlistItem, DisplayBook

logger = logging.getLogger(__name__)

Book = Union[BookSummary, WishlistItem]


def _to_float(value: Any) -> Optional[float]:
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _to_int(value: Any) -> Optional[int]:
    number = _to_float(value)
    return int(number) if number is not None else None


def parse_book_summary(item: Any) -> Optional[BookSummary]:
    """
    Parse a single raw item from the search endpoint.

    Args:
        item: Single entry of the response's ``items`` list

    Returns:
        BookSummary or None if the item is not an object
    """
    if not isinstance(item, dict):
        logger.warning(f"Skipping malformed search item: {item!r}")
        return None

    volume_info = _as_dict(item.get("volumeInfo"))
    image_links = _as_dict(volume_info.get("imageLinks"))
    authors = volume_info.get("authors") or []
    if isinstance(authors, str):
        authors = [authors]
    elif not isinstance(authors, list):
        authors = []

    return BookSummary(
        id=item.get("id"),
        title=str(volume_info.get("title") or ""),
        authors=[str(author) for author in authors],
        thumbnail=image_links.get("thumbnail"),
        small_thumbnail=image_links.get("smallThumbnail"),
        average_rating=_to_float(volume_info.get("averageRating")),
        ratings_count=_to_int(volume_info.get("ratingsCount")),
    )


def parse_search_response(response_json: Any) -> List[BookSummary]:
    """
    Parse a full search response.

    Args:
        response_json: Decoded ``{"items": [...]}`` body

    Returns:
        List of BookSummary objects (empty if no items found)

    Raises:
        ValueError: if the body is not an object or ``items`` is not a list
    """
    if not isinstance(response_json, dict):
        raise ValueError(f"Search response is not an object: {response_json!r}")

    items = response_json.get("items") or []
    if not isinstance(items, list):
        raise ValueError(f"Search items is not a list: {items!r}")

    books = []
    for item in items:
        book = parse_book_summary(item)
        if book:
            books.append(book)

    return books


def parse_wishlist_item(entry: Any) -> Optional[WishlistItem]:
    """Parse one stored wishlist entry."""
    if not isinstance(entry, dict) or "title" not in entry:
        logger.warning(f"Skipping malformed wishlist entry: {entry!r}")
        return None

    authors = entry.get("authors") or ""
    if isinstance(authors, list):
        authors = ", ".join(str(author) for author in authors)

    return WishlistItem(
        title=str(entry["title"]),
        authors=str(authors),
        thumbnail=str(entry.get("thumbnail") or ""),
        rating=_to_float(entry.get("rating")) or 0,
        ratings_count=_to_int(entry.get("ratings_count")) or 0,
        id=entry.get("id"),
    )


def parse_wishlist_response(payload: Any) -> List[WishlistItem]:
    """
    Parse the wishlist endpoint body.

    The backend is expected to return an array; anything else is
    treated as an empty wishlist.
    """
    if not isinstance(payload, list):
        logger.warning(f"Wishlist response is not array: {payload!r}")
        return []

    items = []
    for entry in payload:
        item = parse_wishlist_item(entry)
        if item:
            items.append(item)
    return items


def to_wishlist_item(book: Book) -> WishlistItem:
    """Build the add-call body from either book shape."""
    if isinstance(book, WishlistItem):
        return WishlistItem(
            title=book.title,
            authors=book.authors,
            thumbnail=book.thumbnail,
            rating=book.rating,
            ratings_count=book.ratings_count,
        )

    return WishlistItem(
        title=book.title,
        authors=book.authors_str,
        thumbnail=book.thumbnail or book.small_thumbnail or "",
        rating=book.average_rating or 0,
        ratings_count=book.ratings_count or 0,
    )


def secure_url(url: Optional[str]) -> Optional[str]:
    """Upgrade plain http image links to https."""
    if url and url.startswith("http://"):
        return "https://" + url[len("http://"):]
    return url


def to_display(book: Book) -> DisplayBook:
    """Normalize either book shape into the record the views render."""
    if isinstance(book, WishlistItem):
        return DisplayBook(
            title=book.title,
            authors_text=book.authors,
            thumbnail_url=secure_url(book.thumbnail) or None,
            rating=book.rating,
            ratings_count=book.ratings_count,
        )

    return DisplayBook(
        title=book.title,
        authors_text=book.authors_str,
        thumbnail_url=secure_url(book.thumbnail or book.small_thumbnail) or None,
        rating=book.average_rating or 0,
        ratings_count=book.ratings_count or 0,
    )
