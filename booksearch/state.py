"""Client state and the transitions applied to it.

Every function here is pure: it takes the current state plus event
data and returns a new ``ClientState``. The controller owns the only
live instance and swaps it for the result of each transition.
"""
from dataclasses import dataclass, field, replace
from typing import List

from booksearch.models import BookSummary, WishlistItem, Tab

# User-facing messages, one per failing operation
SEARCH_FAILED = "Failed to search books. Please try again."
NO_RESULTS = "No books found. Try a different search term."
WISHLIST_LOAD_FAILED = "Failed to load wishlist"
WISHLIST_ADD_FAILED = "Failed to add to wishlist"
WISHLIST_REMOVE_FAILED = "Failed to remove from wishlist"
WISHLIST_RESET_FAILED = "Failed to reset wishlist"


@dataclass(frozen=True)
class ClientState:
    """Everything the views render, owned by one controller."""
    books: List[BookSummary] = field(default_factory=list)
    wishlist: List[WishlistItem] = field(default_factory=list)
    loading: bool = False
    active_tab: Tab = Tab.SEARCH
    error: str = ""

    def in_wishlist(self, title: str) -> bool:
        """Exact, case-sensitive title match."""
        return any(item.title == title for item in self.wishlist)


def search_started(state: ClientState) -> ClientState:
    """Mark a search busy and clear the old error."""
    return replace(state, loading=True, error="")


def search_succeeded(state: ClientState, books: List[BookSummary]) -> ClientState:
    """Replace results and bring the search tab forward."""
    return replace(
        state,
        books=list(books),
        loading=False,
        active_tab=Tab.SEARCH,
        error="" if books else NO_RESULTS,
    )


def search_failed(state: ClientState) -> ClientState:
    """Show the search error; prior results stay visible."""
    return replace(state, loading=False, error=SEARCH_FAILED)


def search_finished(state: ClientState) -> ClientState:
    """Clear the busy flag and nothing else."""
    return replace(state, loading=False)


def wishlist_replaced(state: ClientState, items: List[WishlistItem]) -> ClientState:
    """Swap in a freshly fetched wishlist."""
    return replace(state, wishlist=list(items))


def wishlist_item_removed(state: ClientState, title: str) -> ClientState:
    """Drop the entry with this exact title."""
    return replace(state, wishlist=[item for item in state.wishlist if item.title != title])


def tab_switched(state: ClientState, tab: Tab) -> ClientState:
    """Make ``tab`` the active view."""
    return replace(state, active_tab=Tab(tab))


def error_set(state: ClientState, message: str) -> ClientState:
    """Show ``message``, replacing whatever error was shown before."""
    return replace(state, error=message)


def error_dismissed(state: ClientState) -> ClientState:
    """Hide the error banner."""
    return replace(state, error="")
