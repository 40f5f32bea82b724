# Promptdeck Panels Package
"""
Panel implementations for Promptdeck.

Each panel is responsible for its own UI and forwards interaction to the
search controller or the workspace service.
"""

from .search import SearchPanel
from .workspace import WorkspacePanel

__all__ = ["SearchPanel", "WorkspacePanel"]
