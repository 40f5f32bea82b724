# Promptdeck Package
"""
Semantic search bar for prompt templates on Ignis/Wayland.

Panels:
  - Search (top): Query entry, prefix filters, categorised results
  - Workspace: The template loaded from a search result
"""

__version__ = "0.1.0-dev"
