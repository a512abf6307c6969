"""BookSearchClient: drives search and wishlist calls and owns the state."""
import logging
from typing import Set, Union

from booksearch import state as transitions
from booksearch.async_client import AsyncBooksApiClient, BooksApiError
from booksearch.models import BookSummary, WishlistItem, Tab
from booksearch.parse import parse_search_response, parse_wishlist_response, to_wishlist_item
from booksearch.state import ClientState

logger = logging.getLogger(__name__)


class BookSearchClient:
    """
    Single controller for the search and wishlist views.

    Each public coroutine corresponds to one user action. Calls are
    never retried; a failure sets the operation's error message and
    the user re-triggers the action.
    """

    def __init__(self, api: AsyncBooksApiClient):
        self.api = api
        self.state = ClientState()
        self._search_seq = 0
        self._pending_titles: Set[str] = set()

    async def start(self):
        """Reset the server-side wishlist once at startup."""
        await self.reset()

    async def search(self, query: str):
        """
        Run a catalog search.

        Blank queries are ignored. Only the newest search may write
        results; a response for an older one is discarded.
        """
        if not query.strip():
            return

        self._search_seq += 1
        seq = self._search_seq
        self.state = transitions.search_started(self.state)

        try:
            response = await self.api.search(query)
            if seq != self._search_seq:
                logger.debug(f"Dropping stale search response for {query!r}")
                return

            books = parse_search_response(response)
            logger.info(f"Found {len(books)} books for {query!r}")
            self.state = transitions.search_succeeded(self.state, books)
        except (BooksApiError, ValueError) as e:
            logger.error(f"Error searching books: {e}")
            if seq == self._search_seq:
                self.state = transitions.search_failed(self.state)
        finally:
            if seq == self._search_seq and self.state.loading:
                self.state = transitions.search_finished(self.state)

    async def reset(self):
        """Clear the server wishlist and the local cache."""
        try:
            await self.api.reset_wishlist()
        except BooksApiError as e:
            logger.error(f"Error resetting wishlist: {e}")
            self.state = transitions.error_set(self.state, transitions.WISHLIST_RESET_FAILED)
            return
        self.state = transitions.wishlist_replaced(self.state, [])

    async def fetch_wishlist(self):
        """Reload the wishlist; the cached copy survives a failed call."""
        try:
            payload = await self.api.get_wishlist()
        except BooksApiError as e:
            logger.error(f"Error fetching wishlist: {e}")
            self.state = transitions.error_set(self.state, transitions.WISHLIST_LOAD_FAILED)
            return
        self.state = transitions.wishlist_replaced(self.state, parse_wishlist_response(payload))

    async def toggle(self, book: Union[BookSummary, WishlistItem]):
        """Remove ``book`` from the wishlist if its title is there, add it otherwise."""
        title = book.title
        if title in self._pending_titles:
            logger.info(f"Ignoring toggle for {title!r}: previous toggle still running")
            return

        self._pending_titles.add(title)
        try:
            if self.state.in_wishlist(title):
                await self._remove(title)
            else:
                await self._add(book)
        finally:
            self._pending_titles.discard(title)

    async def _remove(self, title: str):
        """Delete by title; the cache only changes on success."""
        try:
            await self.api.remove_from_wishlist(title)
        except BooksApiError as e:
            logger.error(f"Error removing from wishlist: {e}")
            self.state = transitions.error_set(self.state, transitions.WISHLIST_REMOVE_FAILED)
            return
        self.state = transitions.wishlist_item_removed(self.state, title)

    async def _add(self, book: Union[BookSummary, WishlistItem]):
        """Store the flattened entry, then reload the wishlist."""
        item = to_wishlist_item(book)
        try:
            await self.api.add_to_wishlist(item.to_payload())
        except BooksApiError as e:
            logger.error(f"Error adding to wishlist: {e}")
            self.state = transitions.error_set(self.state, transitions.WISHLIST_ADD_FAILED)
            return
        # Reload to pick up server-assigned fields
        await self.fetch_wishlist()

    async def show_tab(self, tab: Tab):
        """Switch views; opening the wishlist re-fetches it."""
        self.state = transitions.tab_switched(self.state, tab)
        if self.state.active_tab == Tab.WISHLIST:
            await self.fetch_wishlist()

    def dismiss_error(self):
        """Hide the error banner; data is untouched."""
        self.state = transitions.error_dismissed(self.state)
