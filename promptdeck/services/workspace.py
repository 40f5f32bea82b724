"""
Workspace Service - Holds the template currently loaded for editing.

The search bar hands a selected template here; the workspace panel listens
for the "changed" signal and redraws.
"""

from typing import Optional

from gi.repository import GObject
from ignis.base_service import BaseService
from loguru import logger

from promptdeck.search.results import TemplateResult


class WorkspaceService(BaseService):
    """
    Service owning the workspace's current template.

    Signals:
        changed: Emitted after the current template is replaced

    Methods:
        set_current_template(item): Load a template into the workspace
    """

    __gtype_name__ = "PromptdeckWorkspaceService"

    __gsignals__ = {
        "changed": (GObject.SignalFlags.RUN_FIRST, None, ()),
    }

    def __init__(self):
        super().__init__()
        self._current_template: Optional[TemplateResult] = None

    @property
    def current_template(self) -> Optional[TemplateResult]:
        return self._current_template

    def set_current_template(self, item: TemplateResult) -> None:
        """
        Load a template into the workspace.

        Args:
            item: Template selected from search results

        Emits:
            changed: Signal to notify the workspace panel
        """
        self._current_template = item
        logger.debug(f"Workspace template set to '{item.name}'")
        self.emit("changed")


# Singleton accessor
_workspace_service_instance = None


def get_workspace_service() -> WorkspaceService:
    """
    Get the singleton WorkspaceService instance.

    Returns:
        WorkspaceService: The global instance
    """
    global _workspace_service_instance
    if _workspace_service_instance is None:
        _workspace_service_instance = WorkspaceService()
    return _workspace_service_instance
