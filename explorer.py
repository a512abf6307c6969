#!/usr/bin/env python3
"""Book Search - interactive terminal client for the catalog and wishlist API."""
import asyncio
import sys
import logging

from booksearch.async_client import AsyncBooksApiClient
from booksearch.config import Config
from booksearch.controller import BookSearchClient
from booksearch.models import Tab
from booksearch.parse import to_display
from booksearch.render import render_screen, wishlist_button

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

HELP = """
Commands:
  <text>    search for books by title, author, or keyword
  :s        show search results
  :w        show my wishlist (reloads it)
  :t N      add/remove card N on the current tab
  :x        dismiss the error message
  :r        redraw
  :h        this help
  :q        quit
"""


def press_wishlist_button(app: BookSearchClient, arg: str):
    """Return the toggle coroutine for card ``arg``, or None if inert."""
    source = app.state.books if app.state.active_tab == Tab.SEARCH else app.state.wishlist
    try:
        index = int(arg) - 1
    except ValueError:
        index = -1
    if not 0 <= index < len(source):
        print(f"⚠  No card {arg!r} on this tab.")
        return None

    book = source[index]
    _, disabled = wishlist_button(app.state, to_display(book))
    if disabled:
        return None
    return app.toggle(book)


def dispatch(app: BookSearchClient, line: str):
    """
    Map one input line to a controller coroutine.

    Returns:
        (coroutine or None, keep_running)
    """
    command, _, arg = line.strip().partition(" ")

    if not command.startswith(":"):
        return app.search(line), True
    if command == ":q":
        return None, False
    if command == ":s":
        return app.show_tab(Tab.SEARCH), True
    if command == ":w":
        return app.show_tab(Tab.WISHLIST), True
    if command == ":t":
        return press_wishlist_button(app, arg.strip()), True
    if command == ":x":
        app.dismiss_error()
    elif command == ":h":
        print(HELP)
    elif command != ":r":
        print(f"⚠  Unknown command {command!r} (:h for help)")
    return None, True


async def run(config: Config):
    """Drive the client until the user quits."""
    async with AsyncBooksApiClient(config.api_base_url, timeout=config.DEFAULT_TIMEOUT) as api:
        app = BookSearchClient(api)
        await app.start()

        tasks = set()

        def redraw(task: asyncio.Task):
            tasks.discard(task)
            if task.cancelled():
                return
            if task.exception() is not None:
                logger.error(f"Request task failed: {task.exception()}", exc_info=task.exception())
                return
            print("\n" + render_screen(app.state))

        print(render_screen(app.state))
        print(HELP)

        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                break

            coro, keep_running = dispatch(app, line)
            if coro is not None:
                task = asyncio.create_task(coro)
                tasks.add(task)
                task.add_done_callback(redraw)
                # Let the task reach its first network await
                await asyncio.sleep(0)
            if not keep_running:
                break
            print(render_screen(app.state))

        if tasks:
            logger.info(f"Waiting for {len(tasks)} pending request(s)")
            await asyncio.gather(*tasks, return_exceptions=True)


def main():
    """Main CLI entry point."""
    config = Config()
    logger.info(f"Using API at {config.api_base_url}")

    try:
        asyncio.run(run(config))
    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"❌ Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
