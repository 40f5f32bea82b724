# Promptdeck Services Package
"""
Backend services for Promptdeck.

The matcher client is importable without GTK; the workspace service is a
GObject service and lives in services.workspace.
"""

from .matcher import MatcherClient, SearchFailure

__all__ = ["MatcherClient", "SearchFailure"]
