"""
Purpose:
- Pydantic models for the caption relay in/out so the API is self-documenting and stable.
"""

from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List

class GenerateRequest(BaseModel):
    prompt: str = Field(..., min_length=1, description="Caption instructions built by the form")
    # data URLs: "data:image/png;base64,...."
    images: List[str] = Field(default_factory=list, description="Base64 data-URL images")

class GenerateResponse(BaseModel):
    text: str

class GenerateError(BaseModel):
    error: str
