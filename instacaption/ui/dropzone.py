"""
Purpose:
- Drag-and-drop target + hidden file picker in front of a SelectionStore.
- Drag state only drives styling; drops and picks are the only paths into the store.
"""

from __future__ import annotations
from enum import Enum
from typing import Iterable, Optional
from .selection import SelectedFile, SelectionStore

class DragState(str, Enum):
    IDLE = "idle"
    DRAG_OVER = "drag_over"

class DropZone:
    def __init__(self, store: SelectionStore):
        self.store = store
        self.state = DragState.IDLE

    @property
    def is_active(self) -> bool:
        return self.state is DragState.DRAG_OVER

    def handle(self, event_type: str, files: Optional[Iterable[SelectedFile]] = None) -> DragState:
        """
        Feed one browser drag event ("dragenter", "dragover", "dragleave", "drop").
        Returns the new state.
        """
        if event_type in ("dragenter", "dragover"):
            self.state = DragState.DRAG_OVER
        elif event_type == "dragleave":
            self.state = DragState.IDLE
        elif event_type == "drop":
            self.state = DragState.IDLE
            self.store.add_files(list(files or []))
        else:
            raise ValueError(f"unknown drag event: {event_type!r}")
        return self.state

    def pick(self, files: Iterable[SelectedFile]) -> None:
        # file-picker "change" event
        self.store.add_files(list(files))

    def accept_attribute(self) -> str:
        return ",".join(self.store.accepted_types or ())

    def describe_limits(self) -> str:
        n = self.store.max_files
        text = f"Maximum {n} file{'' if n == 1 else 's'}"
        if self.store.accepted_types is not None:
            text += f" ({', '.join(self.store.accepted_types)})"
        return text
