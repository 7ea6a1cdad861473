"""
Terminal front end for the breadboard editor.

This package connects curses to the editor core:
- map_key: curses key input -> Action, per mode
- Renderer: draws the view model from breadboard.graph_view each frame

Usage:
    from breadboard.tui import Renderer, map_key
"""

from breadboard.tui.keymap import map_key
from breadboard.tui.renderer import Renderer

__all__ = [
    'map_key',
    'Renderer',
]
