"""
Purpose:
- Caption form controller: config fields, the upload widget, and one-at-a-time submission.
- Framework-free so the Streamlit page only renders state held here.
"""

from __future__ import annotations
import logging
from typing import Any, List, Optional, Sequence
from ..core.settings import settings
from .client import CaptionClient, CaptionResult, VALIDATION_MESSAGE
from .dropzone import DropZone
from .previews import PreviewRegistry
from .prompt import CaptionConfig, build_prompt
from .selection import SelectedFile, SelectionStore

logger = logging.getLogger(__name__)

class CaptionForm:
    def __init__(
        self,
        client: Optional[CaptionClient] = None,
        max_files: Optional[int] = None,
        accepted_types: Optional[Sequence[str]] = None,
        previews: Optional[PreviewRegistry] = None,
    ):
        self.client = client or CaptionClient()
        self.config = CaptionConfig()
        self.selected_files: List[SelectedFile] = []
        self.analysis = ""
        self.is_generating = False
        self.store = SelectionStore(
            self.on_files_selected,
            max_files=settings.upload_max_files if max_files is None else max_files,
            accepted_types=settings.upload_accepted_types if accepted_types is None else accepted_types,
            previews=previews,
        )
        self.dropzone = DropZone(self.store)

    @property
    def prompt(self) -> str:
        return build_prompt(self.config)

    def update(self, **fields: Any) -> CaptionConfig:
        """Replace config fields; raises pydantic ValidationError on out-of-range values."""
        self.config = CaptionConfig(**{**self.config.model_dump(), **fields})
        return self.config

    def on_files_selected(self, files: List[SelectedFile]) -> None:
        image_files = [f for f in files if f.is_image]
        self.selected_files = image_files
        if not image_files:
            self.analysis = VALIDATION_MESSAGE

    def generate(self) -> Optional[CaptionResult]:
        """
        Run one submission. Returns None (and sends nothing) while another
        submission is still in flight.
        """
        if self.is_generating:
            logger.debug("generate() ignored: a caption request is already in flight")
            return None
        if not self.selected_files:
            self.analysis = VALIDATION_MESSAGE
            return CaptionResult(error=VALIDATION_MESSAGE)

        self.is_generating = True
        self.analysis = ""
        try:
            result = self.client.generate(self.prompt, list(self.selected_files))
        finally:
            self.is_generating = False
        self.analysis = result.display
        return result

    def close(self) -> None:
        self.store.close()
