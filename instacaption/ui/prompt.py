"""
Purpose:
- Caption parameters chosen in the form and the deterministic prompt built from them.
"""

from __future__ import annotations
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

class Tone(str, Enum):
    FUNNY = "funny"
    SERIOUS = "serious"
    SARCASTIC = "sarcastic"
    INSPIRATIONAL = "inspirational"
    MOTIVATIONAL = "motivational"
    THOUGHTFUL = "thoughtful"
    WITTY = "witty"

class CaptionConfig(BaseModel):
    word_length: int = Field(default=100, ge=0, le=300, description="Target caption length in words")
    hashtag_count: int = Field(default=5, ge=0, le=10, description="Hashtags to include")
    tone: Optional[Tone] = Field(default=None, description="Tone of voice; unset renders empty")
    seed_text: str = Field(default="", description="Optional topic the caption should be about")

PROMPT_TEMPLATE = (
    "I will create an instagram post from these images. Please create a caption for the post. "
    "The caption should be {word_length} words long and include {hashtag_count} hashtags. "
    "The tone of the caption should be {tone}"
)

def build_prompt(config: CaptionConfig) -> str:
    prompt = PROMPT_TEMPLATE.format(
        word_length=config.word_length,
        hashtag_count=config.hashtag_count,
        tone=config.tone.value if config.tone else "",
    )
    if config.seed_text:
        prompt += f"\n\nThe caption should be about {config.seed_text}."
    return prompt

def word_length_label(config: CaptionConfig) -> str:
    return f"Use {config.word_length} words"

def hashtag_label(config: CaptionConfig) -> str:
    if config.hashtag_count > 0:
        return f"Use {config.hashtag_count} hashtags"
    return "Don't use hashtags"
