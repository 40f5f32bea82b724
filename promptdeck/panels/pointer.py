"""
Pointer-down source shared by every Promptdeck window.

Each attached window gets a capture-phase click gesture, so presses are
seen before any widget handles them. Handlers receive the widget under the
pointer, or None when the press happened outside every Promptdeck window
(detected as the window losing focus).

Handlers connect and disconnect freely; the gestures themselves stay on
the windows and cost nothing while no handler is connected.
"""

from itertools import count
from typing import Callable, Optional

from gi.repository import Gtk
from loguru import logger


class PointerDownSource:
    """Fan out pointer-down events to whoever is currently listening."""

    def __init__(self):
        self._handlers: dict[int, Callable[[Optional[Gtk.Widget]], None]] = {}
        self._ids = count(1)

    def connect(self, handler: Callable[[Optional[Gtk.Widget]], None]) -> int:
        handler_id = next(self._ids)
        self._handlers[handler_id] = handler
        logger.debug(f"Pointer listener {handler_id} connected")
        return handler_id

    def disconnect(self, handler_id: int) -> None:
        if self._handlers.pop(handler_id, None) is not None:
            logger.debug(f"Pointer listener {handler_id} disconnected")

    def attach(self, window) -> None:
        """Report presses inside the window and focus loss from it."""
        gesture = Gtk.GestureClick()
        gesture.set_button(0)  # Any button
        gesture.set_propagation_phase(Gtk.PropagationPhase.CAPTURE)
        gesture.connect("pressed", lambda g, n, x, y, w=window: self._emit(w.pick(x, y, Gtk.PickFlags.DEFAULT)))
        window.add_controller(gesture)

        window.connect("notify::is-active", self._on_active_changed)

    def _on_active_changed(self, window, param):
        if not window.get_property("is-active"):
            self._emit(None)

    def _emit(self, target) -> None:
        # Handlers may disconnect themselves while running
        for handler in list(self._handlers.values()):
            handler(target)
