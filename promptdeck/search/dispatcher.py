"""
Selection Dispatcher - Routes a clicked result to its action.

Templates are loaded into the workspace and the workspace view is shown.
Every other category is not actionable yet and only produces an info toast.
"""

from typing import Callable

from loguru import logger

from promptdeck.search.prefixes import TEMPLATE
from promptdeck.search.results import ResultItem

INFO = "info"
ERROR = "error"

UNSUPPORTED_MESSAGE = "This feature is currently under development."
NOTIFY_DURATION_MS = 6000
WORKSPACE_VIEW = "workspace"


class SelectionDispatcher:
    """
    Dispatch result selections to the workspace, navigation and toasts.

    Args:
        reset: Clears search state; called before the template handoff
        set_current_template: Workspace handoff
        go_to: Navigation request, takes a view id
        notify: Toast callback taking (kind, message, duration_ms)
    """

    def __init__(
        self,
        reset: Callable[[], None],
        set_current_template: Callable[[ResultItem], None],
        go_to: Callable[[str], None],
        notify: Callable[[str, str, int], None],
        duration_ms: int = NOTIFY_DURATION_MS,
    ):
        self._reset = reset
        self._set_current_template = set_current_template
        self._go_to = go_to
        self._notify = notify
        self.duration_ms = duration_ms

    def on_select(self, prefix: str, item: ResultItem) -> None:
        if prefix == TEMPLATE:
            logger.debug(f"Loading template '{item.name}' into workspace")
            self._reset()
            self._set_current_template(item)
            self._go_to(WORKSPACE_VIEW)
            return

        logger.debug(f"Selection of '{prefix}' result '{item.name}' is not supported")
        self._notify(INFO, UNSUPPORTED_MESSAGE, self.duration_ms)
