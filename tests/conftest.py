"""Shared fixtures: an in-memory stand-in for the books backend."""
import json

import httpx
import pytest

from booksearch.async_client import AsyncBooksApiClient


class FakeBackend:
    """Serves the five book endpoints from memory via httpx.MockTransport."""

    def __init__(self):
        self.catalog = {}
        self.wishlist = []
        self.wishlist_payload = None
        self.failing = set()
        self.requests = []
        self._next_id = 1

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method, path = request.method, request.url.path

        if method == "GET" and path == "/books/list":
            return self._maybe_fail("search") or httpx.Response(
                200, json={"items": self.catalog.get(request.url.params["q"], [])}
            )

        if method == "POST" and path == "/books/reset-wishlist":
            failure = self._maybe_fail("reset")
            if failure:
                return failure
            self.wishlist = []
            return httpx.Response(200, json={"message": "Wishlist reset"})

        if method == "GET" and path == "/books/wishlist":
            failure = self._maybe_fail("get")
            if failure:
                return failure
            if self.wishlist_payload is not None:
                return httpx.Response(200, json=self.wishlist_payload)
            return httpx.Response(200, json=self.wishlist)

        if method == "POST" and path == "/books/wishlist":
            failure = self._maybe_fail("add")
            if failure:
                return failure
            entry = json.loads(request.content)
            entry["id"] = self._next_id
            self._next_id += 1
            self.wishlist.append(entry)
            return httpx.Response(201, json=entry)

        if method == "DELETE" and path.startswith("/books/wishlist/"):
            failure = self._maybe_fail("remove")
            if failure:
                return failure
            title = path[len("/books/wishlist/"):]
            self.wishlist = [entry for entry in self.wishlist if entry["title"] != title]
            return httpx.Response(200, json={"message": "Removed"})

        return httpx.Response(404)

    def _maybe_fail(self, operation):
        if operation in self.failing:
            return httpx.Response(500, json={"detail": "boom"})
        return None

    def calls(self, method=None):
        return [
            (request.method, request.url.path)
            for request in self.requests
            if method is None or request.method == method
        ]

    def client(self) -> AsyncBooksApiClient:
        return AsyncBooksApiClient("http://books.test", transport=httpx.MockTransport(self.handle))


def raw_item(title, authors=None, **volume_info):
    """Search result in the catalog's raw shape."""
    info = {"title": title, "authors": authors or []}
    info.update(volume_info)
    return {"id": title.lower().replace(" ", "-"), "volumeInfo": info}


@pytest.fixture
def backend():
    return FakeBackend()
