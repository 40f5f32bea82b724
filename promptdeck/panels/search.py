"""
Search Panel - Search bar with advanced prefixes and categorised results.

Features:
- Search entry, Enter (without Shift) submits
- Search button disabled while searching or while the query is empty
- Advanced panel with one checkbox per category prefix
- Results grouped by category with role, tag and score badges
- Click a template to load it into the workspace
- Click outside the bar to dismiss results and the advanced panel
"""

from gi.repository import Gdk, Gtk
from ignis import widgets
from loguru import logger

from promptdeck.panels.pointer import PointerDownSource
from promptdeck.panels.toast import ToastOverlay
from promptdeck.search.controller import SearchController, SearchTicket
from promptdeck.search.prefixes import PREFIXES, category_title
from promptdeck.search.query import active_prefixes
from promptdeck.search.results import (
    describe,
    role_badge,
    score_badge,
    tag_badges,
)
from promptdeck.services.matcher import MatcherClient
from promptdeck.services.workspace import get_workspace_service
from promptdeck.utils.helpers import go_to_view, load_settings, run_in_background

PLACEHOLDER = "Search prompts and templates with natural language..."
SUGGESTIONS = 'Try searching for "content writing", "code review", or "email templates"'
ADVANCED_HINT = "Use the prefixes below to refine your search results."
NO_RESULTS = "No results found."


class SearchPanel:
    """
    Top panel providing semantic search over templates and prompts.

    Widgets mirror SearchController state; every user action goes through
    the controller and the controller's on_change hook redraws.
    """

    def __init__(self, settings=None, pointer_source=None):
        self.settings = settings or load_settings()
        self.workspace = get_workspace_service()
        self.matcher = MatcherClient.from_settings(self.settings)
        self.pointer_source = pointer_source or PointerDownSource()
        self.toast = ToastOverlay()

        self.controller = SearchController(
            matcher=self.matcher,
            pointer_source=self.pointer_source,
            contains=self._contains,
            set_current_template=self.workspace.set_current_template,
            go_to=go_to_view,
            notify=self.toast.notify,
            on_change=self._refresh,
            on_submit=self._run_search,
            duration_ms=self.settings["notifications"]["duration_ms"],
        )

        # Widgets (created in create_window)
        self.container = None
        self.search_entry = None
        self.search_button = None
        self.search_label = None
        self.prefix_checks = {}
        self.advanced_revealer = None
        self.results_box = None
        self.results_scroll = None

        self._syncing = False
        self._rendered_response = None

    def create_window(self):
        """
        Create the search bar window.

        Returns:
            widgets.Window anchored to the top edge
        """
        self.search_entry = widgets.Entry(
            placeholder_text=PLACEHOLDER,
            css_classes=["search-entry"],
            hexpand=True,
            on_change=lambda x: self._on_search_changed(),
        )

        key_controller = Gtk.EventControllerKey()
        key_controller.connect("key-pressed", self._on_key_press)
        self.search_entry.add_controller(key_controller)

        self.search_label = widgets.Label(label="Search")
        self.search_button = widgets.Button(
            css_classes=["search-button"],
            sensitive=False,
            child=self.search_label,
            on_click=lambda x: self._on_search_clicked(),
        )

        advanced_button = widgets.Button(
            css_classes=["advanced-button"],
            child=widgets.Label(label="Advanced"),
            on_click=lambda x: self.controller.toggle_advanced(),
        )

        self.advanced_revealer = widgets.Revealer(
            reveal_child=False,
            transition_type="slide_down",
            child=self._build_advanced_panel(),
        )

        self.results_box = widgets.Box(
            vertical=True,
            spacing=8,
            css_classes=["search-results"],
        )
        self.results_scroll = widgets.Scroll(
            vexpand=True,
            hexpand=True,
            visible=False,
            min_content_height=380,
            child=self.results_box,
        )

        self.container = widgets.Box(
            vertical=True,
            css_classes=["panel", "search-panel"],
            child=[
                widgets.Box(
                    spacing=12,
                    child=[self.search_entry, self.search_button, advanced_button],
                ),
                self.advanced_revealer,
                self.results_scroll,
                self.toast.widget,
                widgets.Label(
                    label=SUGGESTIONS,
                    css_classes=["search-suggestions"],
                    halign="start",
                ),
            ],
        )

        window = widgets.Window(
            namespace="promptdeck-search",
            css_classes=["promptdeck-window"],
            anchor=["top"],
            exclusivity="normal",
            kb_mode="on_demand",
            layer="top",
            default_width=self.settings["panels"]["search_width"],
            margin_top=8,
            child=self.container,
        )

        self.pointer_source.attach(window)
        window.connect("notify::visible", self._on_visibility_changed)

        return window

    def _build_advanced_panel(self):
        """Checkbox per prefix, in vocabulary order."""
        for prefix in PREFIXES:
            self.prefix_checks[prefix] = widgets.CheckButton(
                label=prefix,
                css_classes=["prefix-check"],
                on_toggled=lambda x, active, p=prefix: self._on_prefix_toggled(p),
            )

        return widgets.Box(
            vertical=True,
            css_classes=["advanced-panel"],
            child=[
                widgets.Label(label=ADVANCED_HINT, css_classes=["advanced-hint"]),
                widgets.Box(spacing=16, child=list(self.prefix_checks.values())),
            ],
        )

    # -- Input --------------------------------------------------------------

    def _on_search_changed(self):
        if self._syncing:
            return
        self.controller.set_query(self.search_entry.text)

    def _on_prefix_toggled(self, prefix):
        if self._syncing:
            return
        self.controller.toggle_prefix(prefix)

    def _on_search_clicked(self):
        ticket = self.controller.begin_search()
        if ticket is not None:
            self._run_search(ticket)

    def _on_key_press(self, controller, keyval, keycode, state):
        """Enter submits, Shift+Enter does not, Escape dismisses overlays."""
        if keyval == Gdk.KEY_Escape:
            self.controller.dismiss()
            return True

        if keyval in (Gdk.KEY_Return, Gdk.KEY_KP_Enter):
            shift = bool(state & Gdk.ModifierType.SHIFT_MASK)
            return self.controller.handle_key("Return", shift=shift)

        return False

    def _run_search(self, ticket: SearchTicket):
        run_in_background(
            lambda: self.matcher.search(ticket.query),
            on_result=lambda response: self.controller.finish_search(ticket, response),
            on_error=lambda error: self.controller.fail_search(ticket, error),
        )

    def _contains(self, target) -> bool:
        if target is None or self.container is None:
            return False
        return target is self.container or target.is_ancestor(self.container)

    # -- Rendering ----------------------------------------------------------

    def _refresh(self):
        """Bring widgets in line with controller state."""
        if self.container is None:
            return

        state = self.controller
        self._syncing = True
        try:
            if self.search_entry.text != state.query:
                self.search_entry.set_text(state.query)
            active = active_prefixes(state.query)
            for prefix, check in self.prefix_checks.items():
                check.set_active(prefix in active)
        finally:
            self._syncing = False

        self.search_button.set_sensitive(state.can_submit)
        self.search_label.set_label("Searching..." if state.is_searching else "Search")
        self.advanced_revealer.set_reveal_child(state.is_advanced_open)

        if state.response is not self._rendered_response:
            self._render_results()
        self.results_scroll.set_visible(state.results_visible)

    def _render_results(self):
        """Rebuild results list from the current response."""
        # Clear existing (GTK4 way)
        child = self.results_box.get_first_child()
        while child:
            next_child = child.get_next_sibling()
            self.results_box.remove(child)
            child = next_child

        self._rendered_response = self.controller.response
        grouping = self.controller.grouping
        if grouping is None:
            return

        if grouping.is_empty:
            self.results_box.append(widgets.Label(
                label=NO_RESULTS,
                css_classes=["no-results"],
            ))
            return

        for prefix, items in grouping.groups:
            self.results_box.append(self._create_group(prefix, items))
        logger.debug(f"Rendered result groups: {grouping.categories()}")

    def _create_group(self, prefix, items):
        return widgets.Box(
            vertical=True,
            css_classes=["result-group"],
            child=[
                widgets.Label(
                    label=category_title(prefix),
                    css_classes=["result-group-header"],
                    halign="start",
                ),
                *[self._create_result_button(prefix, item) for item in items],
            ],
        )

    def _create_result_button(self, prefix, item):
        """
        Create a button for one result.

        Args:
            prefix: Category the item belongs to
            item: ResultItem

        Returns:
            widgets.Button with name, badges and description
        """
        header = [widgets.Label(label=item.name, css_classes=["result-name"])]

        role = role_badge(prefix, item)
        if role is not None:
            header.append(widgets.Label(label=role, css_classes=["badge", "badge-role"]))
        for tag in tag_badges(prefix, item):
            header.append(widgets.Label(label=tag, css_classes=["badge", "badge-tag"]))

        score = score_badge(item)
        if score is not None:
            header.append(widgets.Label(label=score, css_classes=["badge", "badge-score"]))

        return widgets.Button(
            css_classes=["result-item"],
            on_click=lambda x, p=prefix, i=item: self.controller.select(p, i),
            child=widgets.Box(
                vertical=True,
                spacing=4,
                child=[
                    widgets.Box(spacing=8, child=header),
                    widgets.Label(
                        label=describe(prefix, item),
                        css_classes=["result-description"],
                        halign="start",
                        ellipsize="end",
                        max_width_chars=90,
                    ),
                ],
            ),
        )

    def _on_visibility_changed(self, window, param):
        """Drop overlays when the bar is hidden."""
        if not window.get_visible():
            self.controller.dismiss()
            return
        self.search_entry.grab_focus()

    def teardown(self):
        self.controller.close()
