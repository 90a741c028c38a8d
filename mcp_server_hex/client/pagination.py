"""Cursor pagination over Hex list endpoints.

A list endpoint is consumed through a ``fetch_page`` coroutine that takes the
cursor of the previous page (None for the first one) and returns a ``Page``.
Pages are fetched one after another: page N+1 needs the cursor of page N.
"""

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

import structlog

from mcp_server_hex.exceptions import HexMCPError

from .exceptions import HexApiError
from .gateway import HexGateway, is_api_error
from .schemas import HexProject, HexProjectList

T = TypeVar("T")

DEFAULT_MAX_PAGES = 1000

logger = structlog.get_logger("hex.pagination")


class ProtocolViolationError(HexMCPError):
    """Raised when the server breaks the pagination contract.

    Attributes:
        pages_fetched: Number of pages received before the violation.
    """

    def __init__(self, message: str, pages_fetched: int):
        super().__init__(message=message, code="PROTOCOL_VIOLATION")
        self.pages_fetched = pages_fetched


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a cursor-paginated collection."""

    items: list[T] = field(default_factory=list)
    has_more: bool = False
    next_cursor: str | None = None


FetchPage = Callable[[str | None], Awaitable[Page[T]]]


class Paginator(Generic[T]):
    """Lazy, restartable sequence over every page of a collection.

    Each iteration starts again from the first page. ``has_more`` is the stop
    signal; the server is trusted to send a cursor whenever it is true.
    """

    def __init__(self, fetch_page: FetchPage[T], max_pages: int = DEFAULT_MAX_PAGES):
        self._fetch_page = fetch_page
        self._max_pages = max_pages

    async def pages(self) -> AsyncIterator[Page[T]]:
        cursor: str | None = None
        fetched = 0
        while True:
            if fetched >= self._max_pages:
                raise ProtocolViolationError(
                    f"Pagination did not finish after {self._max_pages} pages",
                    pages_fetched=fetched,
                )
            page = await self._fetch_page(cursor)
            fetched += 1
            yield page

            if not page.has_more:
                return
            if not page.next_cursor:
                raise ProtocolViolationError(
                    "Server reported more results without a next cursor",
                    pages_fetched=fetched,
                )
            cursor = page.next_cursor

    async def __aiter__(self) -> AsyncIterator[T]:
        async for page in self.pages():
            for item in page.items:
                yield item

    async def take(self, limit: int) -> list[T]:
        """Return the first ``limit`` items, fetching no more pages than needed."""
        items: list[T] = []
        if limit <= 0:
            return items
        pages = self.pages()
        try:
            async for page in pages:
                items.extend(page.items[: limit - len(items)])
                if len(items) >= limit:
                    break
        finally:
            await pages.aclose()
        return items

    async def collect(self) -> list[T]:
        """Return every item in server order. Any error discards partial results."""
        items: list[T] = []
        pages = 0
        async for page in self.pages():
            items.extend(page.items)
            pages += 1
        logger.debug("Collected paginated results", pages=pages, items=len(items))
        return items


async def collect_all(fetch_page: FetchPage[T], max_pages: int = DEFAULT_MAX_PAGES) -> list[T]:
    """Walk every page starting from no cursor and concatenate the items.

    Args:
        fetch_page: Coroutine returning the page that follows ``cursor``.
        max_pages: Guard against a server that never clears ``has_more``.

    Returns:
        All items in server order.

    Raises:
        ProtocolViolationError: If the server breaks the cursor contract or
            exceeds ``max_pages``.
        HexMCPError: Whatever ``fetch_page`` raises, unchanged.
    """
    return await Paginator(fetch_page, max_pages=max_pages).collect()


def project_pages(gateway: HexGateway, limit: int = 100) -> FetchPage[HexProject]:
    """Build a ``fetch_page`` for ``GET /projects``."""

    async def fetch_page(cursor: str | None) -> Page[HexProject]:
        response = await gateway.request(
            "/projects", "GET", params={"limit": limit, "after": cursor}
        )
        if is_api_error(response):
            raise HexApiError.from_body(response)
        listing = HexProjectList.model_validate(response)
        return Page(
            items=listing.projects,
            has_more=listing.has_more,
            next_cursor=listing.next_cursor,
        )

    return fetch_page
