"""
Workspace Panel - Shows the template loaded from search.

Redraws whenever WorkspaceService emits "changed".
"""

from ignis import widgets

from promptdeck.services.workspace import get_workspace_service
from promptdeck.utils.helpers import view_namespace

EMPTY_TEXT = "Search for a template and select it to start editing."


class WorkspacePanel:
    """Read-only view of the workspace's current template."""

    def __init__(self, settings):
        self.settings = settings
        self.workspace = get_workspace_service()
        self.workspace.connect("changed", lambda x: self._refresh())

        self.name_label = None
        self.role_label = None
        self.tags_label = None
        self.description_label = None

    def create_window(self):
        self.name_label = widgets.Label(css_classes=["workspace-name"], halign="start")
        self.role_label = widgets.Label(css_classes=["badge", "badge-role"], halign="start")
        self.tags_label = widgets.Label(css_classes=["workspace-tags"], halign="start")
        self.description_label = widgets.Label(
            css_classes=["workspace-description"],
            halign="start",
            wrap=True,
        )

        self._refresh()

        panels = self.settings["panels"]
        return widgets.Window(
            namespace=view_namespace("workspace"),
            css_classes=["promptdeck-window"],
            anchor=["top"],
            exclusivity="normal",
            kb_mode="on_demand",
            layer="top",
            visible=False,  # Shown by go_to_view("workspace")
            default_width=panels["workspace_width"],
            default_height=panels["workspace_height"],
            margin_top=160,
            child=widgets.Box(
                vertical=True,
                spacing=8,
                css_classes=["panel", "workspace-panel"],
                child=[
                    widgets.Label(label="Workspace", css_classes=["panel-header"], halign="start"),
                    self.name_label,
                    self.role_label,
                    self.tags_label,
                    widgets.Scroll(vexpand=True, hexpand=True, child=self.description_label),
                ],
            ),
        )

    def _refresh(self):
        if self.name_label is None:
            return

        template = self.workspace.current_template
        if template is None:
            self.name_label.set_label(EMPTY_TEXT)
            self.role_label.set_visible(False)
            self.tags_label.set_label("")
            self.description_label.set_label("")
            return

        self.name_label.set_label(template.name)
        self.role_label.set_label(template.role)
        self.role_label.set_visible(bool(template.role))
        self.tags_label.set_label("  ".join(f"#{tag}" for tag in template.tags))
        self.description_label.set_label(template.description)
