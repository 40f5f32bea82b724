"""
Toast Overlay - Transient notification strip under the search bar.

Shows one message at a time. A newer toast replaces the current one and
restarts its timer.
"""

from gi.repository import GLib
from ignis import widgets
from loguru import logger


class ToastOverlay:
    """Revealer-backed toast with auto-dismiss."""

    def __init__(self):
        self._gen = 0  # Generation counter to cancel stale hide timers

        self.label = widgets.Label(
            label="",
            css_classes=["toast-label"],
            wrap=True,
        )
        self.box = widgets.Box(
            css_classes=["toast"],
            child=[self.label],
        )
        self.widget = widgets.Revealer(
            transition_type="slide_down",
            transition_duration=200,
            reveal_child=False,
            child=self.box,
        )

    def notify(self, kind: str, message: str, duration_ms: int) -> None:
        """Show a toast. kind is "info" or "error"."""
        if kind == "error":
            logger.warning(f"Toast: {message}")
        else:
            logger.info(f"Toast: {message}")

        self._gen += 1
        gen = self._gen

        self.label.set_label(message)
        self.box.set_css_classes(["toast", f"toast-{kind}"])
        self.widget.set_reveal_child(True)

        GLib.timeout_add(duration_ms, self._hide, gen)

    def _hide(self, gen) -> bool:
        if gen == self._gen:
            self.widget.set_reveal_child(False)
        return False  # Don't repeat
