"""Text rendering of the client state."""
import math
from typing import Any, List, Tuple

from tabulate import tabulate

from booksearch.models import StarState, DisplayBook, Tab
from booksearch.parse import to_display
from booksearch.state import ClientState

STAR_GLYPHS = {
    StarState.FILLED: "★",
    StarState.HALF: "⯨",
    StarState.EMPTY: "☆",
}

NO_IMAGE = "📚 No Image"


def _rating_value(rating: Any) -> float:
    """Rating as a float clamped to [0, 5]; junk, NaN and infinities count as 0."""
    try:
        value = float(rating)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return min(max(value, 0.0), 5.0)


def render_stars(rating: Any = None) -> List[StarState]:
    """
    Five star states for an average rating.

    Args:
        rating: Average in [0, 5]; None or unparseable counts as 0

    Returns:
        Exactly five states: filled up to floor(rating), one half star
        when the fractional part is at least 0.5, empty after that
    """
    value = _rating_value(rating)
    full_stars = math.floor(value)
    has_half_star = value % 1 >= 0.5

    stars = []
    for i in range(1, 6):
        if i <= full_stars:
            stars.append(StarState.FILLED)
        elif i == full_stars + 1 and has_half_star:
            stars.append(StarState.HALF)
        else:
            stars.append(StarState.EMPTY)
    return stars


def stars_text(rating: Any = None) -> str:
    """Glyph string for a rating, e.g. ★★⯨☆☆."""
    return "".join(STAR_GLYPHS[star] for star in render_stars(rating))


def rating_text(rating: Any = None) -> str:
    """One-decimal label, "0.0" when missing."""
    value = _rating_value(rating)
    return f"{value:.1f}" if value else "0.0"


def wishlist_button(state: ClientState, book: DisplayBook) -> Tuple[str, bool]:
    """
    Label and disabled flag for a card's wishlist button.

    On the search tab a book already in the wishlist is shown as inert;
    removal is only offered from the wishlist tab.
    """
    in_wishlist = state.in_wishlist(book.title)
    if not in_wishlist:
        return "Add to Wishlist", False
    if state.active_tab == Tab.WISHLIST:
        return "Remove from Wishlist", False
    return "In Wishlist", True


def _truncate(text: str, width: int) -> str:
    return text[:width] + "..." if len(text) > width else text


def render_cards(state: ClientState, books: List[DisplayBook]) -> str:
    """Numbered tabulate grid of book cards."""
    headers = ["#", "Title", "Authors", "Rating", "Cover", "Wishlist"]
    rows = []
    for i, book in enumerate(books, 1):
        label, disabled = wishlist_button(state, book)
        heart = "♥" if state.in_wishlist(book.title) else "♡"
        rows.append([
            i,
            _truncate(book.title, 50),
            _truncate(book.authors_text, 30),
            f"{stars_text(book.rating)} {rating_text(book.rating)} ({book.ratings_count or 0})",
            book.thumbnail_url or NO_IMAGE,
            f"{heart} {label}" + (" (disabled)" if disabled else ""),
        ])
    return tabulate(rows, headers=headers, tablefmt="grid")


def visible_books(state: ClientState) -> List[DisplayBook]:
    """Display records for the active tab, in order."""
    source = state.books if state.active_tab == Tab.SEARCH else state.wishlist
    return [to_display(book) for book in source]


def render_screen(state: ClientState) -> str:
    """Full screen: header, status, error banner, tabs and the active view."""
    lines = [
        "📚 Book Search App",
        "Find your next favorite book",
        "",
        "🔍 Searching..." if state.loading else "🔍 Search",
    ]

    if state.error:
        lines.append(f"⚠️ {state.error}  [:x to dismiss]")

    search_tab = f"📖 Search Results ({len(state.books)})"
    wishlist_tab = f"❤️ My Wishlist ({len(state.wishlist)})"
    if state.active_tab == Tab.SEARCH:
        search_tab = f"[{search_tab}]"
    else:
        wishlist_tab = f"[{wishlist_tab}]"
    lines.append(f"{search_tab}   {wishlist_tab}")
    lines.append("")

    books = visible_books(state)
    if state.active_tab == Tab.SEARCH and state.loading:
        lines.append("Searching for books...")
    elif books:
        lines.append(render_cards(state, books))
    elif state.active_tab == Tab.SEARCH:
        lines.extend(["🔍 No Results Yet", "Search for books to see results here"])
    else:
        lines.extend(["💝 Your Wishlist is Empty", "Start adding books to your wishlist!"])

    return "\n".join(lines)
