"""
Purpose:
- Centralized configuration using pydantic-settings.
- Reads from environment variables and optional .env file.
- Shared by the relay server (provider knobs) and the Streamlit front-end (upload widget knobs).
"""

from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Pydantic v2 config (env file + ignore unexpected env vars)
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API host/port
    host: str = Field(default="0.0.0.0", description="Bind address for FastAPI/Uvicorn")
    port: int = Field(default=8000, description="Port for FastAPI/Uvicorn")

    # CORS
    cors_allow_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8501"],
        description="Allowed origins for browser apps"
    )

    # ---- Provider (OpenAI chat completions) ----
    # OPENAI_API_KEY comes from .env or the shell
    openai_api_key: Optional[str] = None
    openai_base_url: str = Field(default="https://api.openai.com/v1")
    caption_model: str = Field(default="gpt-4o", description="Multimodal model used for every caption")
    image_detail: str = Field(default="low", description="Per-image detail hint sent to the provider")

    # ---- Front-end knobs ----
    relay_url: str = Field(default="http://localhost:8000", description="Base URL the UI posts captions to")
    upload_max_files: int = Field(default=5, ge=1)
    upload_accepted_types: List[str] = Field(default=["image/png", "image/jpeg", "image/jpg"])
    preview_size: int = Field(default=256, description="Longest edge of preview thumbnails (px)")

    log_level: str = Field(default="INFO")

settings = Settings()
