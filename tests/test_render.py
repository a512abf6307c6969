"""Tests for star rating and screen rendering."""
from booksearch.models import StarState, BookSummary, WishlistItem, DisplayBook, Tab
from booksearch.render import (
    render_stars,
    stars_text,
    rating_text,
    wishlist_button,
    render_screen,
    NO_IMAGE,
)
from booksearch.state import ClientState

FILLED, HALF, EMPTY = StarState.FILLED, StarState.HALF, StarState.EMPTY


def test_render_stars_always_five():
    """Test every rating in [0, 5] yields five states with at most one half."""
    for tenths in range(0, 51):
        stars = render_stars(tenths / 10)
        assert len(stars) == 5
        assert stars.count(HALF) <= 1
        if HALF in stars:
            # Half star sits right after the filled run
            assert stars.index(HALF) == stars.count(FILLED)


def test_render_stars_edges():
    """Test the fixed reference values."""
    assert render_stars(0) == [EMPTY] * 5
    assert render_stars(5) == [FILLED] * 5
    assert render_stars(3.5) == [FILLED, FILLED, FILLED, HALF, EMPTY]
    assert render_stars(None) == [EMPTY] * 5
    assert render_stars() == [EMPTY] * 5


def test_render_stars_below_half():
    """Test a fractional part under 0.5 is not rounded up."""
    assert render_stars(3.4) == [FILLED, FILLED, FILLED, EMPTY, EMPTY]
    assert render_stars(0.5) == [HALF, EMPTY, EMPTY, EMPTY, EMPTY]


def test_render_stars_unparseable():
    """Test junk input is treated as zero."""
    assert render_stars("n/a") == [EMPTY] * 5
    assert render_stars(float("nan")) == [EMPTY] * 5
    assert render_stars("4") == [FILLED] * 4 + [EMPTY]


def test_render_stars_non_finite_and_out_of_range():
    """Test infinities count as zero and values are clamped to [0, 5]."""
    assert render_stars(float("inf")) == [EMPTY] * 5
    assert render_stars(float("-inf")) == [EMPTY] * 5
    assert render_stars(7.5) == [FILLED] * 5
    assert render_stars(-2) == [EMPTY] * 5
    assert rating_text(float("inf")) == "0.0"
    assert rating_text(9) == "5.0"


def test_render_screen_survives_infinite_rating():
    """Test a card with an infinite rating still renders."""
    state = ClientState(books=[BookSummary(id="1", title="Dune", average_rating=float("inf"))])

    assert "☆☆☆☆☆ 0.0 (0)" in render_screen(state)


def test_stars_text_and_labels():
    """Test the glyph string and numeric label."""
    assert stars_text(2.5) == "★★⯨☆☆"
    assert rating_text(4.26) == "4.3"
    assert rating_text(4) == "4.0"
    assert rating_text(None) == "0.0"
    assert rating_text(0) == "0.0"


def _display(title):
    return DisplayBook(title, "", None, 0, 0)


def test_wishlist_button_not_in_wishlist():
    """Test books outside the wishlist can always be added."""
    state = ClientState()
    assert wishlist_button(state, _display("Dune")) == ("Add to Wishlist", False)


def test_wishlist_button_disabled_on_search_tab():
    """Test a saved book is inert on the search tab."""
    state = ClientState(wishlist=[WishlistItem("Dune")], active_tab=Tab.SEARCH)
    assert wishlist_button(state, _display("Dune")) == ("In Wishlist", True)


def test_wishlist_button_remove_on_wishlist_tab():
    """Test removal is offered from the wishlist tab."""
    state = ClientState(wishlist=[WishlistItem("Dune")], active_tab=Tab.WISHLIST)
    assert wishlist_button(state, _display("Dune")) == ("Remove from Wishlist", False)


def test_render_screen_search_results():
    """Test the search tab shows cards with https covers and placeholders."""
    state = ClientState(
        books=[
            BookSummary(id="1", title="Dune", authors=["Frank Herbert"],
                        thumbnail="http://img/x.jpg", average_rating=3.5, ratings_count=12),
            BookSummary(id="2", title="Emma", authors=["Jane Austen"]),
        ],
        wishlist=[WishlistItem("Dune")],
    )

    screen = render_screen(state)

    assert "[📖 Search Results (2)]" in screen
    assert "❤️ My Wishlist (1)" in screen
    assert "https://img/x.jpg" in screen
    assert "http://img/x.jpg" not in screen
    assert NO_IMAGE in screen
    assert "★★★⯨☆ 3.5 (12)" in screen
    assert "In Wishlist (disabled)" in screen
    assert "Add to Wishlist" in screen


def test_render_screen_loading_and_error():
    """Test the busy note and the error banner."""
    state = ClientState(loading=True, error="Failed to load wishlist")

    screen = render_screen(state)

    assert "🔍 Searching..." in screen
    assert "Searching for books..." in screen
    assert "⚠️ Failed to load wishlist" in screen


def test_render_screen_empty_states():
    """Test both empty views."""
    assert "No Results Yet" in render_screen(ClientState())
    assert "Your Wishlist is Empty" in render_screen(ClientState(active_tab=Tab.WISHLIST))
