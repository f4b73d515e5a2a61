"""Interactive catalog session.

``catalogcli shell`` keeps one HTTP client and one
:class:`~catalogcli.repository.ProductRepository` open for the whole
session, so repeated queries are answered from the read-through cache until
their TTL runs out. Run with ``--verbose`` to see cache hits and misses.

Session commands::

    list [SORT_BY] [asc|desc]   first page of the catalog
    search TEXT                 full-text search
    category SLUG               products in a category
    categories                  all categories
    show ID                     one product's full record
    next / prev                 move through the last listing
    refresh                     reload the last view from the API
    clear                       empty every cache
    stats                       cache entry counts
    help                        this list
    quit                        leave the shell
"""

from __future__ import annotations

import asyncio
import shlex
from typing import Awaitable, Callable, Optional

import typer

from catalogcli.commands.common import (
    open_repository,
    show_categories,
    show_details,
    show_page,
)
from catalogcli.commands.products import SORT_ORDERS, _context
from catalogcli.output import error, info, print_table, success
from catalogcli.repository import ProductRepository, category_key, search_key
from catalogcli.result import Error, Result, Success
from catalogcli.usecases import (
    GetCategoriesUseCase,
    GetProductDetailsUseCase,
    GetProductsByCategoryUseCase,
    GetProductsUseCase,
    SearchProductsUseCase,
)

PageFetch = Callable[[int], Awaitable[Result]]

HELP_TEXT = __doc__.split("Session commands::", 1)[1].strip("\n") if __doc__ else ""


class ShellSession:
    """State of one interactive session: the repository and the last view.

    Args:
        repository: Repository kept alive for the session.
        page_size: Page size for listings.
    """

    def __init__(self, repository: ProductRepository, page_size: int) -> None:
        self._repository = repository
        self._page_size = page_size
        self._products = GetProductsUseCase(repository)
        self._search = SearchProductsUseCase(repository)
        self._details = GetProductDetailsUseCase(repository)
        self._by_category = GetProductsByCategoryUseCase(repository)
        self._categories = GetCategoriesUseCase(repository)

        self._page_fetch: Optional[PageFetch] = None
        self._page_title = ""
        self._skip = 0
        self._has_next = False
        self._refresh: Optional[Callable[[], Awaitable[None]]] = None

    async def handle(self, line: str) -> bool:
        """Execute one command line. Returns ``False`` when the session should end."""
        try:
            words = shlex.split(line)
        except ValueError as exc:
            error(f"Cannot parse command: {exc}")
            return True
        if not words:
            return True

        command, args = words[0].lower(), words[1:]
        if command in ("quit", "exit"):
            return False
        if command == "help":
            info(HELP_TEXT)
        elif command == "list":
            await self._list(args)
        elif command == "search":
            await self._search_command(" ".join(args))
        elif command == "category":
            await self._category_command(" ".join(args))
        elif command == "categories":
            await self._categories_command()
        elif command == "show":
            await self._show(args)
        elif command == "next":
            await self._turn_page(1)
        elif command == "prev":
            await self._turn_page(-1)
        elif command == "refresh":
            await self._refresh_last()
        elif command == "clear":
            await self._repository.clear_cache()
            success("Cache cleared.")
        elif command == "stats":
            sizes = await self._repository.cache_sizes()
            print_table(["Cache", "Entries"], [[k, str(v)] for k, v in sizes.items()])
        else:
            error(f"Unknown command: {command} (try 'help')")
        return True

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    async def _list(self, args: list[str]) -> None:
        sort_by = args[0] if args else None
        order = args[1] if len(args) > 1 else None
        if order is not None and order not in SORT_ORDERS:
            error(f"Invalid sort order: {order} (expected asc or desc)")
            return

        async def fetch(skip: int) -> Result:
            return await self._products(self._page_size, skip, sort_by, order)

        async def reload(skip: int) -> Result:
            return await self._repository.refresh_products(self._page_size, skip, sort_by, order)

        await self._open_listing(fetch, reload, "Products")

    async def _search_command(self, query: str) -> None:
        async def fetch(skip: int) -> Result:
            return await self._search(query, self._page_size, skip)

        async def reload(skip: int) -> Result:
            await self._repository.products_cache.remove(
                search_key(query.strip(), self._page_size, skip)
            )
            return await fetch(skip)

        await self._open_listing(fetch, reload, f"Search: {query.strip()}")

    async def _category_command(self, slug: str) -> None:
        async def fetch(skip: int) -> Result:
            return await self._by_category(slug, self._page_size, skip)

        async def reload(skip: int) -> Result:
            await self._repository.products_cache.remove(
                category_key(slug.strip(), self._page_size, skip)
            )
            return await fetch(skip)

        await self._open_listing(fetch, reload, f"Category: {slug.strip()}")

    async def _categories_command(self) -> None:
        result = await self._categories()
        if self._report(result):
            show_categories(result.data)

            async def refresh() -> None:
                outcome = await self._repository.refresh_categories()
                if self._report(outcome):
                    show_categories(outcome.data)

            self._refresh = refresh

    async def _show(self, args: list[str]) -> None:
        if len(args) != 1:
            error("Usage: show ID")
            return
        try:
            product_id = int(args[0])
        except ValueError:
            error("Usage: show ID")
            return
        result = await self._details(product_id)
        if self._report(result):
            show_details(result.data)

            async def refresh() -> None:
                outcome = await self._repository.refresh_product_details(product_id)
                if self._report(outcome):
                    show_details(outcome.data)

            self._refresh = refresh

    async def _turn_page(self, step: int) -> None:
        if self._page_fetch is None:
            error("No listing to page through (try 'list').")
            return
        if step > 0 and not self._has_next:
            info("Already on the last page.")
            return
        if step < 0 and self._skip == 0:
            info("Already on the first page.")
            return
        await self._load_page(max(0, self._skip + step * self._page_size))

    async def _refresh_last(self) -> None:
        if self._refresh is None:
            error("Nothing to refresh yet.")
            return
        await self._refresh()

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    async def _open_listing(
        self,
        fetch: PageFetch,
        reload: PageFetch,
        title: str,
    ) -> None:
        # A failed first page keeps the previous listing current.
        result = await fetch(0)
        if not self._report(result):
            return

        async def refresh() -> None:
            self._show_page(await reload(self._skip), self._skip)

        self._page_fetch = fetch
        self._page_title = title
        self._refresh = refresh
        self._show_page(result, 0)

    async def _load_page(self, skip: int) -> None:
        assert self._page_fetch is not None
        self._show_page(await self._page_fetch(skip), skip)

    def _show_page(self, result: Result, skip: int) -> None:
        if self._report(result):
            self._skip = skip
            self._has_next = result.data.has_next_page
            show_page(result.data, self._page_title)

    @staticmethod
    def _report(result: Result) -> bool:
        """Print an :class:`Error`; return ``True`` only for a :class:`Success`."""
        if isinstance(result, Error):
            error(result.message)
            return False
        return isinstance(result, Success)


def shell_command(ctx: typer.Context) -> None:
    """Start an interactive session with a warm cache."""
    config, transport = _context(ctx)

    async def run() -> None:
        async with open_repository(config, transport) as repository:
            session = ShellSession(repository, config.request.page_size)
            info("Catalog shell. Type 'help' for commands, 'quit' to leave.")
            while True:
                # blocking read, kept off the event loop
                try:
                    line = await asyncio.to_thread(
                        typer.prompt, "catalog", default="", show_default=False, prompt_suffix="> "
                    )
                except typer.Abort:
                    break
                if not await session.handle(line):
                    break

    asyncio.run(run())
