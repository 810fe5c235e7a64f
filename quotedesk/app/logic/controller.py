"""Quote controller.

Wires the directory loader and the quote fetcher to the display state.
Every display mutation goes through the `UiDispatcher`.
"""

import asyncio
from collections.abc import Callable

from loguru import logger

from quotedesk.app.logic.dispatch import UiDispatcher
from quotedesk.app.logic.quote_display import DisplayError, QuoteDisplay
from quotedesk.client.directory import DirectoryLoader
from quotedesk.client.quotes import QuoteFetcher
from quotedesk.core.domain_models import CompanyDirectory, Quote
from quotedesk.core.exceptions import FetchError

DisplayUpdate = Callable[[QuoteDisplay], QuoteDisplay]


class QuoteController:
    """Owns the company directory and the currently displayed quote.

    With `cancel_stale_requests` enabled, selecting another company cancels
    the in-flight refresh and drops any result that belongs to an older
    selection. Disabled, superseded fetches run to completion and overwrite
    the display when they land.
    """

    def __init__(
        self,
        directory_loader: DirectoryLoader,
        fetcher: QuoteFetcher,
        dispatcher: UiDispatcher,
        cancel_stale_requests: bool = True,
        on_update: Callable[[QuoteDisplay], None] | None = None,
        directory: CompanyDirectory | None = None,
    ) -> None:
        self.directory_loader = directory_loader
        self.fetcher = fetcher
        self.dispatcher = dispatcher
        self.cancel_stale_requests = cancel_stale_requests
        self.on_update = on_update

        self.directory = directory
        self.fatal_error: DisplayError | None = None
        self.display = QuoteDisplay()
        self.selected_index: int | None = None

        self._generation = 0
        self._current_task: asyncio.Task[None] | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    # --- Startup ---

    async def start(self) -> bool:
        """Load the directory (unless one was given) and refresh the first company.

        Returns:
            False if the directory could not be loaded; `fatal_error` is set.
        """
        if self.directory is None and not await self.load_directory():
            return False
        self.select(0)
        return True

    async def load_directory(self) -> bool:
        """Load the company directory once.

        Returns:
            False on failure, with `fatal_error` describing the blocking prompt.
        """
        self.fatal_error = None
        try:
            directory = await self.directory_loader.load()
        except FetchError as e:
            logger.error(f"Company directory load failed: {e}")
            self.fatal_error = DisplayError(
                title="Could not load the company list",
                message=str(e),
                fatal=True,
            )
            return False

        if directory.is_empty:
            logger.error("Company directory is empty")
            self.fatal_error = DisplayError(
                title="Could not load the company list",
                message="The company list is empty.",
                fatal=True,
            )
            return False

        self.directory = directory
        return True

    # --- Selection ---

    def select(self, index: int) -> asyncio.Task[None]:
        """Reset the display and start a refresh for the company at `index`."""
        if self.directory is None:
            raise RuntimeError("Company directory not loaded")

        symbol = self.directory.symbol_at(index)
        self.selected_index = index
        self._generation += 1
        generation = self._generation

        if self.cancel_stale_requests and self._current_task and not self._current_task.done():
            logger.debug("Cancelling superseded refresh")
            self._current_task.cancel()

        self._apply(generation, lambda _: QuoteDisplay.loading())

        task = asyncio.create_task(self._refresh(symbol, generation))
        self._current_task = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def select_name(self, name: str) -> asyncio.Task[None]:
        if self.directory is None:
            raise RuntimeError("Company directory not loaded")
        return self.select(self.directory.names.index(name))

    @property
    def selected_symbol(self) -> str | None:
        if self.directory is None or self.selected_index is None:
            return None
        return self.directory.symbol_at(self.selected_index)

    # --- User decisions ---

    def dismiss_error(self) -> None:
        """Hide the current error prompt. Does not re-trigger any fetch."""
        self.dispatcher.run(self._commit, self._generation, lambda d: d.without_error())

    async def retry(self) -> bool:
        """Explicit user retry: reload the directory after a fatal error,
        otherwise refresh the current selection."""
        if self.directory is None:
            return await self.start()
        if self.selected_index is not None:
            await self.select(self.selected_index)
        return True

    async def wait(self) -> None:
        """Wait for every refresh still running.

        Cancelled refreshes are ignored. Anything else that escaped a refresh
        (e.g. Streamlit's rerun / stop signals raised while painting) is
        raised again here.
        """
        while pending := [task for task in self._tasks if not task.done()]:
            results = await asyncio.gather(*pending, return_exceptions=True)
            for result in results:
                if isinstance(result, BaseException) and not isinstance(
                    result, asyncio.CancelledError
                ):
                    raise result

    # --- Internals ---

    async def _refresh(self, symbol: str, generation: int) -> None:
        try:
            quote = await self.fetcher.fetch_quote(symbol)
        except FetchError as e:
            logger.error(f"[{symbol}] Quote fetch failed: {e}")
            self._fail(generation, f"Could not load the quote for {symbol}", e)
            return
        except Exception as e:
            logger.exception(f"[{symbol}] Unexpected error while fetching quote: {e!r}")
            self._fail(generation, f"Could not load the quote for {symbol}", e)
            return

        self._apply(generation, lambda d: d.with_quote(quote))
        await self._load_logo(quote, generation)

    async def _load_logo(self, quote: Quote, generation: int) -> None:
        if self._is_stale(generation):
            return
        try:
            logo = await self.fetcher.fetch_logo(quote.symbol)
        except FetchError as e:
            logger.warning(f"[{quote.symbol}] Logo fetch failed: {e}")
            self._fail(generation, f"Could not load the logo for {quote.symbol}", e)
            return
        except Exception as e:
            logger.exception(f"[{quote.symbol}] Unexpected error while fetching logo: {e!r}")
            self._fail(generation, f"Could not load the logo for {quote.symbol}", e)
            return
        self._apply(generation, lambda d: d.with_logo(logo))

    def _fail(self, generation: int, title: str, error: Exception) -> None:
        prompt = DisplayError(title=title, message=str(error) or type(error).__name__)
        self._apply(generation, lambda d: d.with_error(prompt))

    def _is_stale(self, generation: int) -> bool:
        return self.cancel_stale_requests and generation != self._generation

    def _apply(self, generation: int, update: DisplayUpdate) -> None:
        self.dispatcher.run(self._commit, generation, update)

    def _commit(self, generation: int, update: DisplayUpdate) -> None:
        if self._is_stale(generation):
            logger.debug(f"Dropping display update from superseded refresh #{generation}")
            return
        self.display = update(self.display)
        if self.on_update is not None:
            self.on_update(self.display)
