"""
Purpose:
- Client half of a caption submission: encode selected files, post them to the relay,
  and fold every outcome into a CaptionResult.

Notes:
- Files are encoded concurrently; the join is all-or-nothing.
- One request per submission: no timeout, no retry.
"""

from __future__ import annotations
import base64
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence
import httpx
from ..core.settings import settings
from ..errors import EncodingError, RelayError, ValidationError
from .selection import SelectedFile

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Please upload at least one image file."
FAILURE_MESSAGE = "An error occurred while analyzing the images. Please try again."

MAX_ENCODE_WORKERS = 8

@dataclass(frozen=True)
class CaptionResult:
    text: Optional[str] = None
    error: Optional[str] = None

    def __post_init__(self):
        if (self.text is None) == (self.error is None):
            raise ValueError("CaptionResult needs exactly one of text or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def display(self) -> str:
        return self.text if self.ok else self.error

def to_data_url(file: SelectedFile) -> str:
    # zero-byte files encode to an empty payload, same as FileReader
    if not isinstance(file.data, (bytes, bytearray)):
        raise EncodingError(f"Failed to convert {file.name!r} to base64")
    b64 = base64.b64encode(file.data).decode("ascii")
    return f"data:{file.mime_type};base64,{b64}"

def encode_all(files: Sequence[SelectedFile]) -> List[str]:
    """
    Encode every file in parallel. Any failure aborts the whole batch with
    EncodingError; results keep the input order.
    """
    if not files:
        return []
    with ThreadPoolExecutor(max_workers=min(len(files), MAX_ENCODE_WORKERS)) as pool:
        futures = [pool.submit(to_data_url, f) for f in files]
        try:
            return [f.result() for f in futures]
        except EncodingError:
            raise
        except Exception as e:
            raise EncodingError(f"Failed to convert file to base64: {e!r}") from e

class CaptionClient:
    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.BaseTransport] = None):
        self.base_url = (base_url or settings.relay_url).rstrip("/")
        self._transport = transport

    def request_caption(self, prompt: str, images: List[str]) -> str:
        try:
            with httpx.Client(transport=self._transport, timeout=None) as client:
                r = client.post(f"{self.base_url}/api/generate", json={"prompt": prompt, "images": images})
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPError as e:
            raise RelayError(f"Failed to generate caption: {e!r}") from e
        except ValueError as e:
            raise RelayError(f"Relay returned invalid JSON: {e!r}") from e

        text = data.get("text") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise RelayError("Relay response has no text")
        return text

    def generate(self, prompt: str, files: Sequence[SelectedFile]) -> CaptionResult:
        try:
            if not files:
                raise ValidationError(VALIDATION_MESSAGE)
            images = encode_all(files)
            text = self.request_caption(prompt, images)
        except ValidationError:
            return CaptionResult(error=VALIDATION_MESSAGE)
        except Exception:
            # encoding, transport and parsing failures all end the submission the same way
            logger.exception("Error analyzing images")
            return CaptionResult(error=FAILURE_MESSAGE)
        return CaptionResult(text=text)
