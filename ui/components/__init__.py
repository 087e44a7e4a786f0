"""UI components package for the Streamlit sheet editor.

Each panel is a class inheriting from `BaseComponent` with a `render()`
method that draws the UI and optionally a `save_changes()` method to
persist edits via services.
"""

from .base_component import BaseComponent  # re-export for convenience

__all__ = [
    "BaseComponent",
]
