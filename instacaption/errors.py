"""
Purpose:
- Error taxonomy shared by the upload/form side and the relay side.
- Every error is terminal for the current submission; nothing here is retried.
"""

from __future__ import annotations

class CaptionError(Exception):
    """Base class for caption-generation failures."""

class ValidationError(CaptionError):
    """No usable files selected; raised before any network call."""

class EncodingError(CaptionError):
    """A selected file could not be turned into a base64 data URL."""

class RelayError(CaptionError):
    """The relay endpoint was unreachable or answered with a non-2xx status."""

class ProviderError(CaptionError):
    """The external LLM provider call failed (server side)."""
