# Common language: Environment/ops probe that surfaces version pins and provider config.
# Use this before/after upgrades to confirm no silent drift.

from fastapi import APIRouter
from ..core.settings import settings
import sys, importlib

router = APIRouter(tags=["health"])

def _ver(modname: str) -> str:
    try:
        m = importlib.import_module(modname)
        return getattr(m, "__version__", "unknown")
    except Exception:
        return "not-installed"

@router.get("/healthz")
def healthz():
    return {
        "status": "ok",
        "python": sys.version.split()[0],
        "versions": {
            "fastapi": _ver("fastapi"),
            "uvicorn": _ver("uvicorn"),
            "pydantic": _ver("pydantic"),
            "pydantic_settings": _ver("pydantic_settings"),
            "httpx": _ver("httpx"),
            "PIL": _ver("PIL"),
        },
        "config": {
            "caption_model": settings.caption_model,
            "image_detail": settings.image_detail,
            "openai_base_url": settings.openai_base_url,
        },
        "env_keys_present": {
            "OPENAI_API_KEY": bool(settings.openai_api_key),
        },
    }
