"""
Purpose:
- Transient, revocable preview handles for selected image files.
- A handle owns one Pillow thumbnail until it is released; releasing drops the image.

Notes:
- Handles are opaque strings ("preview:<n>"), never reused within a registry.
- Double release is a caller bug and raises KeyError.
"""

from __future__ import annotations
import itertools
import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Dict, Optional
from PIL import Image, ImageOps, UnidentifiedImageError
from ..core.settings import settings

logger = logging.getLogger(__name__)

@dataclass
class Preview:
    handle: str
    name: str
    image: Optional[Image.Image]   # None when Pillow could not decode the bytes

class PreviewRegistry:
    def __init__(self, size: Optional[int] = None):
        self.size = int(size or settings.preview_size)
        self._live: Dict[str, Preview] = {}
        self._ids = itertools.count(1)

    def create(self, name: str, data: bytes) -> str:
        handle = f"preview:{next(self._ids)}"
        self._live[handle] = Preview(handle=handle, name=name, image=self._thumbnail(name, data))
        return handle

    def release(self, handle: str) -> None:
        preview = self._live.pop(handle)
        if preview.image is not None:
            preview.image.close()

    def get(self, handle: str) -> Optional[Image.Image]:
        return self._live[handle].image

    def is_live(self, handle: str) -> bool:
        return handle in self._live

    @property
    def live_handles(self) -> int:
        return len(self._live)

    def _thumbnail(self, name: str, data: bytes) -> Optional[Image.Image]:
        try:
            with Image.open(BytesIO(data)) as src:
                img = ImageOps.exif_transpose(src).convert("RGB")
        except (UnidentifiedImageError, OSError) as e:
            logger.warning("No preview for %s: %r", name, e)
            return None
        img.thumbnail((self.size, self.size))
        return img
