"""splitdeck - pane layout engine for multi-pane workspaces"""

__version__ = "0.1.0"
