from backend.engine.selection.hittest import cell_at_point
from backend.engine.selection.tracker import (
    Selection,
    SelectionState,
    SelectionTracker,
    is_adjacent,
)

__all__ = [
    "Selection",
    "SelectionState",
    "SelectionTracker",
    "cell_at_point",
    "is_adjacent",
]
