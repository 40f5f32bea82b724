"""
Helper utilities for Promptdeck.

Provides common functions used across panels:
- Settings loading
- View navigation between panel windows
- Running the matcher off the GTK main loop
"""

import asyncio
import copy
import threading
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional

import toml
from loguru import logger

SETTINGS_PATH = Path(__file__).parent.parent / "data" / "settings.toml"

VIEW_PREFIX = "promptdeck-view-"

DEFAULT_SETTINGS = {
    "matcher": {
        "base_url": "http://localhost:8000",
        "endpoint": "/api/search",
        "timeout_s": 10.0,
        "connect_timeout_s": 5.0,
    },
    "notifications": {
        "duration_ms": 6000,
    },
    "panels": {
        "search_width": 720,
        "workspace_width": 720,
        "workspace_height": 600,
    },
    "logging": {
        "level": "INFO",
    },
}


def load_settings(settings_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from TOML file.

    Args:
        settings_path: Override for data/settings.toml

    Returns:
        Dictionary containing settings with defaults applied

    Example settings.toml:
        [matcher]
        base_url = "http://localhost:8000"
        endpoint = "/api/search"

        [notifications]
        duration_ms = 6000
    """
    path = settings_path or SETTINGS_PATH

    if not path.exists():
        logger.info(f"Settings file not found at {path}, using defaults")
        return copy.deepcopy(DEFAULT_SETTINGS)

    try:
        loaded = toml.load(path)
    except Exception:
        logger.exception(f"Could not load settings from {path}, using defaults")
        return copy.deepcopy(DEFAULT_SETTINGS)

    return _deep_merge(copy.deepcopy(DEFAULT_SETTINGS), loaded)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence)
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def view_namespace(view_id: str) -> str:
    return f"{VIEW_PREFIX}{view_id}"


def go_to_view(view_id: str) -> None:
    """
    Show the window for a view and hide the other view windows.

    The search bar window is not a view and stays as it is.
    """
    from ignis.app import IgnisApp

    app = IgnisApp.get_default()
    target = view_namespace(view_id)
    found = False

    for window in app.get_windows():
        namespace = window.namespace or ""
        if not namespace.startswith(VIEW_PREFIX):
            continue
        window.set_visible(namespace == target)
        found = found or namespace == target

    if not found:
        logger.warning(f"No window registered for view '{view_id}'")


def run_in_background(
    work: Callable[[], Awaitable[Any]],
    on_result: Callable[[Any], None],
    on_error: Callable[[BaseException], None],
) -> threading.Thread:
    """
    Run a coroutine on a worker thread and report back on the main loop.

    Args:
        work: Zero-argument callable returning the coroutine to run
        on_result: Called on the GTK main loop with the coroutine's result
        on_error: Called on the GTK main loop with the raised exception

    Returns:
        The started daemon thread
    """
    from gi.repository import GLib

    def target():
        try:
            result = asyncio.run(work())
        except Exception as e:
            GLib.idle_add(_fire_once, on_error, e)
        else:
            GLib.idle_add(_fire_once, on_result, result)

    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    return thread


def _fire_once(callback, value) -> bool:
    """Wrapper for GLib.idle_add callbacks."""
    callback(value)
    return False  # Don't repeat
