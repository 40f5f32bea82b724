"""
Search package - Query parsing, result grouping and interaction state.

Pure logic with no GTK dependency; the panels drive it.
"""

from .controller import Overlay, SearchController, SearchTicket
from .dispatcher import SelectionDispatcher
from .prefixes import PREFIXES
from .query import is_valid_query, toggle_prefix
from .results import Grouping, ResultItem, SearchResponse, classify

__all__ = [
    "PREFIXES",
    "Grouping",
    "Overlay",
    "ResultItem",
    "SearchController",
    "SearchResponse",
    "SearchTicket",
    "SelectionDispatcher",
    "classify",
    "is_valid_query",
    "toggle_prefix",
]
