# Promptdeck Utilities Package
"""
Shared utility functions and helpers for Promptdeck.
"""

from .helpers import go_to_view, load_settings, run_in_background

__all__ = ["go_to_view", "load_settings", "run_in_background"]
