"""
Search Controller - Interaction state for the search bar.

Owns the query text, the in-flight flag, the last response and which
overlay is visible. The results overlay and the advanced panel never show
together, so a single Overlay value tracks them.

Outside-click dismissal listens on a shared pointer source only while an
overlay is open. The subscription is taken when an overlay opens and
released when both are closed or the controller is torn down.

Searches are split into begin/finish so a GTK host can run the matcher off
the main loop; submit() chains them for asyncio hosts.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol

from loguru import logger

from promptdeck.search.dispatcher import ERROR, NOTIFY_DURATION_MS, SelectionDispatcher
from promptdeck.search.query import is_valid_query, toggle_prefix
from promptdeck.search.results import Grouping, ResultItem, SearchResponse, classify

SEARCH_ERROR_MESSAGE = "Error during search"


class Overlay(Enum):
    NONE = "none"
    ADVANCED = "advanced"
    RESULTS = "results"


class Matcher(Protocol):
    async def search(self, query: str) -> SearchResponse: ...


class PointerSource(Protocol):
    """Process-wide pointer-down events. Handlers receive the event target."""

    def connect(self, handler: Callable[[object], None]) -> int: ...

    def disconnect(self, handler_id: int) -> None: ...


@dataclass(frozen=True)
class SearchTicket:
    """Identifies one search; outcomes for stale tickets are ignored."""
    generation: int
    query: str


class SearchController:
    """
    State machine behind the search bar.

    Args:
        matcher: Remote matcher with an async search(query) method
        pointer_source: Shared pointer-down event source
        contains: Returns True if an event target is inside the search bar
        set_current_template: Workspace handoff for selected templates
        go_to: Navigation request, takes a view id
        notify: Toast callback taking (kind, message, duration_ms)
        on_change: Called after every state change (UI refresh hook)
        on_submit: Runs the matcher for a ticket started by the Enter key
    """

    def __init__(
        self,
        matcher: Matcher,
        pointer_source: PointerSource,
        contains: Callable[[object], bool],
        set_current_template: Callable[[ResultItem], None],
        go_to: Callable[[str], None],
        notify: Callable[[str, str, int], None],
        on_change: Optional[Callable[[], None]] = None,
        on_submit: Optional[Callable[[SearchTicket], None]] = None,
        duration_ms: int = NOTIFY_DURATION_MS,
    ):
        self.matcher = matcher
        self.pointer_source = pointer_source
        self.contains = contains
        self.notify = notify
        self.on_change = on_change
        self.on_submit = on_submit
        self.duration_ms = duration_ms
        self.dispatcher = SelectionDispatcher(
            reset=self._reset_after_selection,
            set_current_template=set_current_template,
            go_to=go_to,
            notify=notify,
            duration_ms=duration_ms,
        )

        self.query = ""
        self.is_searching = False
        self.response: Optional[SearchResponse] = None
        self.overlay = Overlay.NONE

        self._generation = 0
        self._pointer_handler_id: Optional[int] = None
        self._closed = False

    # -- Derived state ------------------------------------------------------

    @property
    def can_submit(self) -> bool:
        return not self.is_searching and is_valid_query(self.query)

    @property
    def is_advanced_open(self) -> bool:
        return self.overlay is Overlay.ADVANCED

    @property
    def results_visible(self) -> bool:
        return self.overlay is Overlay.RESULTS and self.response is not None

    @property
    def grouping(self) -> Optional[Grouping]:
        """Display grouping of the current response, None before any search."""
        if self.response is None:
            return None
        return classify(self.response)

    # -- Query editing ------------------------------------------------------

    def set_query(self, text: str) -> None:
        if text == self.query:
            return
        self.query = text
        self._changed()

    def toggle_prefix(self, prefix: str) -> None:
        self.query = toggle_prefix(self.query, prefix)
        self._changed()

    # -- Overlays -----------------------------------------------------------

    def toggle_advanced(self) -> None:
        """Open or close the advanced panel. Opening hides the results."""
        if self.overlay is Overlay.ADVANCED:
            self.overlay = Overlay.RESULTS if self.response is not None else Overlay.NONE
        else:
            self.overlay = Overlay.ADVANCED
        self._changed()

    def dismiss(self) -> None:
        """Close both overlays and drop the response."""
        self.response = None
        self.overlay = Overlay.NONE
        self._changed()

    def _on_pointer_down(self, target) -> None:
        if self.overlay is Overlay.NONE:
            return
        if not self.contains(target):
            logger.debug("Pointer down outside search bar, dismissing overlays")
            self.dismiss()

    # -- Searching ----------------------------------------------------------

    def handle_key(self, key: str, shift: bool = False) -> bool:
        """
        Handle a key press from the search entry.

        Returns:
            True if the key was consumed (Enter without Shift)
        """
        if key == "Return" and not shift:
            ticket = self.begin_search()
            if ticket is not None and self.on_submit is not None:
                self.on_submit(ticket)
            return True
        return False

    def begin_search(self) -> Optional[SearchTicket]:
        """
        Enter the searching state if the query is valid and idle.

        Returns:
            A ticket for the new search, or None if submitting is disabled
        """
        if not self.can_submit:
            return None

        self._generation += 1
        self.is_searching = True
        self.response = None
        self.overlay = Overlay.NONE
        logger.debug(f"Searching for '{self.query}' (generation {self._generation})")
        self._changed()
        return SearchTicket(generation=self._generation, query=self.query)

    def finish_search(self, ticket: SearchTicket, response: SearchResponse) -> bool:
        """Apply a search response. Returns False if the ticket is stale."""
        if not self._is_current(ticket):
            logger.debug(f"Ignoring stale response for generation {ticket.generation}")
            return False

        self.is_searching = False
        self.response = response
        self.overlay = Overlay.RESULTS
        self._changed()
        return True

    def fail_search(self, ticket: SearchTicket, error: BaseException) -> bool:
        """Record a failed search. Returns False if the ticket is stale."""
        if not self._is_current(ticket):
            logger.debug(f"Ignoring stale failure for generation {ticket.generation}")
            return False

        logger.opt(exception=error).error(f"Search failed for '{ticket.query}'")
        self.is_searching = False
        self.overlay = Overlay.NONE
        self.notify(ERROR, SEARCH_ERROR_MESSAGE, self.duration_ms)
        self._changed()
        return True

    async def submit(self) -> bool:
        """
        Run a full search with the matcher.

        Returns:
            True if a search was started, False if submitting was disabled
        """
        ticket = self.begin_search()
        if ticket is None:
            return False

        try:
            response = await self.matcher.search(ticket.query)
        except Exception as e:
            self.fail_search(ticket, e)
        else:
            self.finish_search(ticket, response)
        return True

    def _is_current(self, ticket: SearchTicket) -> bool:
        return not self._closed and ticket.generation == self._generation

    # -- Selection ----------------------------------------------------------

    def select(self, prefix: str, item: ResultItem) -> None:
        self.dispatcher.on_select(prefix, item)

    def _reset_after_selection(self) -> None:
        self.query = ""
        self.response = None
        self.overlay = Overlay.NONE
        self._changed()

    # -- Lifecycle ----------------------------------------------------------

    def close(self) -> None:
        """Tear down: release the pointer subscription and ignore late results."""
        self._closed = True
        self._release_pointer()

    def _changed(self) -> None:
        self._sync_pointer_subscription()
        if self.on_change is not None:
            self.on_change()

    def _sync_pointer_subscription(self) -> None:
        if self._closed:
            return
        if self.overlay is not Overlay.NONE and self._pointer_handler_id is None:
            self._pointer_handler_id = self.pointer_source.connect(self._on_pointer_down)
        elif self.overlay is Overlay.NONE:
            self._release_pointer()

    def _release_pointer(self) -> None:
        if self._pointer_handler_id is not None:
            self.pointer_source.disconnect(self._pointer_handler_id)
            self._pointer_handler_id = None
