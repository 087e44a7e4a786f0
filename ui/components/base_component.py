from __future__ import annotations

"""Base component class for the sheet UI.

All panels inherit from `BaseComponent` and implement the `render()` method.
Components receive the central UI state and any services they need through
their constructor to keep them decoupled and testable.
"""

from dataclasses import dataclass

from ui.state import SheetUIState


@dataclass
class BaseComponent:
    """Base class for all UI components.

    Attributes:
        state: Central UI state holding the sheet being edited
    """

    state: SheetUIState

    def render(self) -> None:
        """Render the component.

        Subclasses must override this method to draw Streamlit widgets
        and forward edits to `state.store`.
        """
        raise NotImplementedError("Subclasses must implement render()")

    def save_changes(self) -> bool:
        """Persist any pending changes.

        Return True on success. Default implementation is a no-op to
        keep components lightweight when persistence isn't needed.
        """
        return True
