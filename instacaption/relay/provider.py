"""
Purpose:
- Forward a prompt + base64 images to the OpenAI Chat Completions API and return the text.
- One user message: a text part followed by one image_url part per image, each tagged with
  the configured detail hint ("low" by default).

Notes:
- Requires: settings.openai_api_key (from .env or env)
- Single blocking request: no timeout, no retry, no streaming.
"""

from __future__ import annotations
import os
from typing import Any, Dict, List, Optional
import httpx
from ..core.settings import settings
from ..errors import ProviderError

def build_messages(prompt: str, images: List[str], detail: str) -> List[Dict[str, Any]]:
    content: List[Dict[str, Any]] = [{"type": "text", "text": prompt}]
    for image in images:
        content.append({"type": "image_url", "image_url": {"url": image, "detail": detail}})
    return [{"role": "user", "content": content}]

def _extract_text(data: Dict[str, Any]) -> str:
    choices = data.get("choices") or []
    if not choices:
        raise ProviderError("provider returned no choices")
    text = (choices[0].get("message") or {}).get("content")
    if not isinstance(text, str):
        raise ProviderError("provider returned a choice without text content")
    return text

def generate_text(
    prompt: str,
    images: List[str],
    client: Optional[httpx.Client] = None,
) -> str:
    """
    Ask the configured model for a completion. Raises ProviderError on any
    transport, status or payload failure.
    """
    api_key = settings.openai_api_key or os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ProviderError("OPENAI_API_KEY is not configured")

    payload = {
        "model": settings.caption_model,
        "messages": build_messages(prompt, images, settings.image_detail),
    }
    url = settings.openai_base_url.rstrip("/") + "/chat/completions"
    headers = {"Authorization": f"Bearer {api_key}"}

    try:
        if client is None:
            r = httpx.post(url, json=payload, headers=headers, timeout=None)
        else:
            r = client.post(url, json=payload, headers=headers, timeout=None)
        r.raise_for_status()
        data = r.json()
    except httpx.HTTPError as e:
        raise ProviderError(f"provider request failed: {e!r}") from e
    except ValueError as e:
        raise ProviderError(f"provider returned invalid JSON: {e!r}") from e

    if not isinstance(data, dict):
        raise ProviderError("provider returned an unexpected payload")
    return _extract_text(data)
