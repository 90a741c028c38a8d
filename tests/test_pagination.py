"""Unit tests for cursor pagination."""

import pytest

from mcp_server_hex.client.exceptions import HexApiError, RateLimitedError
from mcp_server_hex.client.pagination import (
    Page,
    Paginator,
    ProtocolViolationError,
    collect_all,
    project_pages,
)

from conftest import StubGateway, project_payload


class PagedSource:
    """Serves fixed pages keyed by cursor and records the cursors requested."""

    def __init__(self, pages: dict[str | None, Page | Exception]):
        self.pages = pages
        self.cursors: list[str | None] = []

    async def __call__(self, cursor: str | None) -> Page:
        self.cursors.append(cursor)
        page = self.pages[cursor]
        if isinstance(page, Exception):
            raise page
        return page


@pytest.fixture
def three_pages() -> PagedSource:
    return PagedSource({
        None: Page(items=[1, 2], has_more=True, next_cursor="c1"),
        "c1": Page(items=[3, 4], has_more=True, next_cursor="c2"),
        "c2": Page(items=[5], has_more=False),
    })


class TestCollectAll:
    """Tests for walking every page."""

    @pytest.mark.asyncio
    async def test_concatenates_pages_in_order(self, three_pages):
        """Test three pages are fetched with each previous cursor."""
        items = await collect_all(three_pages)

        assert items == [1, 2, 3, 4, 5]
        assert three_pages.cursors == [None, "c1", "c2"]

    @pytest.mark.asyncio
    async def test_single_page(self):
        """Test a page without has_more stops after one call."""
        source = PagedSource({None: Page(items=["a"], has_more=False, next_cursor="ignored")})

        assert await collect_all(source) == ["a"]
        assert source.cursors == [None]

    @pytest.mark.asyncio
    async def test_empty_collection(self):
        """Test an empty first page yields no items."""
        source = PagedSource({None: Page()})

        assert await collect_all(source) == []

    @pytest.mark.asyncio
    async def test_error_on_later_page_propagates(self):
        """Test a failure on page two discards page one's items."""
        source = PagedSource({
            None: Page(items=[1], has_more=True, next_cursor="c1"),
            "c1": RateLimitedError(),
        })

        with pytest.raises(RateLimitedError):
            await collect_all(source)

        assert source.cursors == [None, "c1"]

    @pytest.mark.asyncio
    async def test_has_more_without_cursor_is_protocol_violation(self):
        """Test a missing cursor is reported instead of silently stopping."""
        source = PagedSource({None: Page(items=[1], has_more=True, next_cursor=None)})

        with pytest.raises(ProtocolViolationError) as exc_info:
            await collect_all(source)

        assert exc_info.value.code == "PROTOCOL_VIOLATION"
        assert exc_info.value.pages_fetched == 1

    @pytest.mark.asyncio
    async def test_max_pages_guard(self):
        """Test a server that never clears has_more is cut off."""
        calls = []

        async def endless(cursor):
            calls.append(cursor)
            return Page(items=[len(calls)], has_more=True, next_cursor=f"c{len(calls)}")

        with pytest.raises(ProtocolViolationError) as exc_info:
            await collect_all(endless, max_pages=3)

        assert len(calls) == 3
        assert exc_info.value.pages_fetched == 3


class TestPaginator:
    """Tests for lazy iteration."""

    @pytest.mark.asyncio
    async def test_iterates_items(self, three_pages):
        """Test async iteration yields every item."""
        items = [item async for item in Paginator(three_pages)]

        assert items == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_take_fetches_only_needed_pages(self, three_pages):
        """Test take() stops before requesting the last page."""
        items = await Paginator(three_pages).take(3)

        assert items == [1, 2, 3]
        assert three_pages.cursors == [None, "c1"]

    @pytest.mark.asyncio
    async def test_take_zero_fetches_nothing(self, three_pages):
        """Test take(0) makes no calls."""
        assert await Paginator(three_pages).take(0) == []
        assert three_pages.cursors == []

    @pytest.mark.asyncio
    async def test_restartable(self, three_pages):
        """Test a second pass starts again from the first page."""
        paginator = Paginator(three_pages)

        await paginator.collect()
        await paginator.collect()

        assert three_pages.cursors == [None, "c1", "c2", None, "c1", "c2"]


class TestProjectPages:
    """Tests for the /projects page fetcher."""

    @pytest.mark.asyncio
    async def test_walks_project_cursors(self):
        """Test the fetcher passes limit and after and maps the listing."""
        listings = {
            None: {"projects": [project_payload("p1")], "hasMore": True, "nextCursor": "c1"},
            "c1": {"projects": [project_payload("p2")], "hasMore": False},
        }
        gateway = StubGateway({("GET", "/projects"): lambda params: listings[params.get("after")]})

        projects = await collect_all(project_pages(gateway, limit=50))

        assert [project.project_id for project in projects] == ["p1", "p2"]
        assert [call["params"] for call in gateway.calls] == [
            {"limit": 50, "after": None},
            {"limit": 50, "after": "c1"},
        ]

    @pytest.mark.asyncio
    async def test_error_body_on_second_page_discards_first(self):
        """Test an error-shaped second page raises HexApiError instead of returning page one."""
        listings = {
            None: {"projects": [project_payload("p1")], "hasMore": True, "nextCursor": "c1"},
            "c1": {"error": {"code": "INVALID_CURSOR", "message": "Cursor expired"}},
        }
        gateway = StubGateway({("GET", "/projects"): lambda params: listings[params.get("after")]})

        with pytest.raises(HexApiError) as exc_info:
            await collect_all(project_pages(gateway))

        assert exc_info.value.api_code == "INVALID_CURSOR"
        assert [call["params"]["after"] for call in gateway.calls] == [None, "c1"]

    @pytest.mark.asyncio
    async def test_error_body_raises(self):
        """Test an error-shaped page becomes HexApiError."""
        gateway = StubGateway({
            ("GET", "/projects"): {"error": {"code": "FORBIDDEN", "message": "No access"}},
        })

        with pytest.raises(HexApiError) as exc_info:
            await collect_all(project_pages(gateway))

        assert exc_info.value.api_code == "FORBIDDEN"
        assert exc_info.value.message == "No access"
