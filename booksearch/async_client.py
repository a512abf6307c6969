"""Async HTTP client for the book search and wishlist backend."""
import httpx
from typing import Optional, Dict, Any
from urllib.parse import quote
import logging

logger = logging.getLogger(__name__)


class BooksApiError(Exception):
    """A backend call failed (transport error or non-2xx status)."""

    def __init__(self, operation: str, status_code: Optional[int] = None, cause: Optional[Exception] = None):
        self.operation = operation
        self.status_code = status_code
        self.cause = cause
        detail = f"status {status_code}" if status_code is not None else str(cause)
        super().__init__(f"{operation} failed: {detail}")


class AsyncBooksApiClient:
    """Async client for the catalog search and wishlist endpoints."""

    def __init__(
        self,
        base_url: str = "http://localhost:9000",
        timeout: int = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize async client.

        Args:
            base_url: Backend root, e.g. http://localhost:9000
            timeout: Request timeout
            transport: Optional transport override (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        # Create async HTTP client
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport
        )

    async def search(self, query: str) -> Any:
        """
        Search the catalog.

        Args:
            query: Free-text query, sent as typed

        Returns:
            Decoded response body
        """
        response = await self._request("search", "GET", "/books/list", params={"q": query})
        return self._json("search", response)

    async def reset_wishlist(self) -> None:
        """Clear the server-side wishlist."""
        await self._request("reset-wishlist", "POST", "/books/reset-wishlist")

    async def get_wishlist(self) -> Any:
        """Fetch the stored wishlist (expected to be a JSON array)."""
        response = await self._request("get-wishlist", "GET", "/books/wishlist")
        return self._json("get-wishlist", response)

    async def add_to_wishlist(self, item: Dict[str, Any]) -> None:
        """Store a flattened wishlist entry."""
        await self._request("add-wishlist", "POST", "/books/wishlist", json=item)

    async def remove_from_wishlist(self, title: str) -> None:
        """Delete the wishlist entry with this exact title."""
        path = f"/books/wishlist/{quote(title, safe='')}"
        await self._request("remove-wishlist", "DELETE", path)

    async def _request(self, operation: str, method: str, path: str, **kwargs) -> httpx.Response:
        """
        Issue one request, no retries.

        Raises:
            BooksApiError: on transport failure or non-2xx status
        """
        try:
            logger.info(f"{method} {path}")
            response = await self.client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(f"Status {e.response.status_code} for {operation}")
            raise BooksApiError(operation, status_code=e.response.status_code, cause=e) from e
        except httpx.HTTPError as e:
            logger.error(f"Async request failed: {e}")
            raise BooksApiError(operation, cause=e) from e

        return response

    @staticmethod
    def _json(operation: str, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON body for {operation}: {e}")
            raise BooksApiError(operation, status_code=response.status_code, cause=e) from e

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
