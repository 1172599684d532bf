"""
Purpose:
- Authoritative, order-preserving, capped list of files chosen in the upload widget.
- Notifies its owner with the complete current list after every mutation.
- Pairs every preview handle it creates with exactly one release.

Policy (kept as-is from the UI prototype):
- Accepted-types filter is a substring match on the MIME type, not equality.
- The cap truncates: earliest-added files win, late candidates are dropped.
- Duplicate names are allowed.
"""

from __future__ import annotations
import logging
import mimetypes
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple
from .previews import PreviewRegistry

logger = logging.getLogger(__name__)

@dataclass(eq=False)
class SelectedFile:
    name: str                      # not guaranteed unique
    mime_type: str
    data: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")

    @classmethod
    def from_bytes(cls, name: str, data: bytes, mime_type: Optional[str] = None) -> "SelectedFile":
        if not mime_type:
            mime_type = mimetypes.guess_type(name)[0] or "application/octet-stream"
        return cls(name=name, mime_type=mime_type, data=data)

@dataclass(eq=False)
class _Entry:
    file: SelectedFile
    preview: Optional[str] = None   # live handle, created lazily on render

OnChange = Callable[[List[SelectedFile]], None]

class SelectionStore:
    def __init__(
        self,
        on_change: OnChange,
        max_files: int = 10,
        accepted_types: Optional[Sequence[str]] = None,
        previews: Optional[PreviewRegistry] = None,
    ):
        if max_files < 1:
            raise ValueError(f"max_files must be >= 1, got {max_files}")
        self.on_change = on_change
        self.max_files = max_files
        self.accepted_types = tuple(accepted_types) if accepted_types is not None else None
        self.previews = previews or PreviewRegistry()
        self._entries: List[_Entry] = []
        self._closed = False

    # --- read side -----------------------------------------------------------

    @property
    def files(self) -> Tuple[SelectedFile, ...]:
        return tuple(e.file for e in self._entries)

    @property
    def is_full(self) -> bool:
        return len(self._entries) >= self.max_files

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SelectedFile]:
        return iter(self.files)

    def accepts(self, file: SelectedFile) -> bool:
        if self.accepted_types is None:
            return True
        return any(t in file.mime_type for t in self.accepted_types)

    # --- mutations -----------------------------------------------------------

    def add_files(self, candidates: Iterable[SelectedFile]) -> List[SelectedFile]:
        """
        Append accepted candidates after the current files, then cut the
        combined list to max_files. Returns the list sent to on_change.
        """
        self._check_open()
        room = max(self.max_files - len(self._entries), 0)
        admitted = [c for c in candidates if self.accepts(c)]
        if len(admitted) > room:
            logger.info("Selection full: dropping %d of %d new file(s)", len(admitted) - room, len(admitted))
        for c in admitted[:room]:
            self._entries.append(_Entry(file=c))
        return self._notify()

    def remove_file(self, index: int) -> List[SelectedFile]:
        self._check_open()
        if 0 <= index < len(self._entries):
            self._release(self._entries.pop(index))
        else:
            logger.warning("remove_file: index %d out of range (0..%d)", index, len(self._entries) - 1)
        return self._notify()

    def clear_all(self) -> List[SelectedFile]:
        self._check_open()
        entries, self._entries = self._entries, []
        for e in entries:
            self._release(e)
        return self._notify()

    # --- previews ------------------------------------------------------------

    def preview_for(self, index: int) -> Optional[str]:
        """Return the live preview handle for an image file, creating it on first need."""
        if not 0 <= index < len(self._entries):
            raise IndexError(f"preview_for: index {index} out of range (0..{len(self._entries) - 1})")
        entry = self._entries[index]
        if not entry.file.is_image:
            return None
        if entry.preview is None:
            entry.preview = self.previews.create(entry.file.name, entry.file.data)
        return entry.preview

    def render(self) -> List[Tuple[int, SelectedFile, Optional[str]]]:
        """Rows for display: (index, file, preview handle or None)."""
        return [(i, e.file, self.preview_for(i)) for i, e in enumerate(self._entries)]

    def close(self) -> None:
        """Tear down: release every held preview. Safe to call twice."""
        if self._closed:
            return
        for e in self._entries:
            self._release(e)
        self._entries = []
        self._closed = True

    def __enter__(self) -> "SelectionStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # --- internals -----------------------------------------------------------

    def _release(self, entry: _Entry) -> None:
        if entry.preview is not None:
            self.previews.release(entry.preview)
            entry.preview = None

    def _notify(self) -> List[SelectedFile]:
        current = [e.file for e in self._entries]
        self.on_change(list(current))
        return current

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("SelectionStore is closed")
