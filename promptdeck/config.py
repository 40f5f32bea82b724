"""
Promptdeck - Main Ignis Configuration

This file is the entry point for Ignis. It creates the search bar and the
workspace view and wires them to the shared services.

Usage:
  ignis init -c /path/to/promptdeck/config.py
  ignis open-window promptdeck-search
"""

import os
import sys

from ignis.app import IgnisApp
from loguru import logger

from promptdeck.panels.search import SearchPanel
from promptdeck.panels.workspace import WorkspacePanel
from promptdeck.utils.helpers import load_settings

settings = load_settings()

logger.remove()
logger.add(sys.stderr, level=settings["logging"]["level"])

# Get Ignis app instance
app = IgnisApp.get_default()

config_dir = os.path.dirname(os.path.realpath(__file__))
styles_path = os.path.join(config_dir, "styles", "main.css")
try:
    app.apply_css(styles_path)
except Exception as e:
    logger.warning(f"Could not load {styles_path}: {e}")

search_panel = SearchPanel(settings)
workspace_panel = WorkspacePanel(settings)

search_window = search_panel.create_window()
workspace_window = workspace_panel.create_window()

# Store panel references on windows for cross-panel communication
search_window.panel = search_panel
workspace_window.panel = workspace_panel

# Clicks in the workspace count as outside the search bar
search_panel.pointer_source.attach(workspace_window)

logger.info("Promptdeck initialized")
