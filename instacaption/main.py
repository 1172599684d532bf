"""
Purpose:
- FastAPI application factory and router mounts.
- Adds CORS for the Streamlit front-end / local dev.
- Uvicorn will serve this on 0.0.0.0:8000 by default:
    uvicorn instacaption.main:app --host 0.0.0.0 --port 8000
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .core.settings import settings
from .api.health import router as health_router
from .api.generate import router as generate_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

def create_app() -> FastAPI:
    app = FastAPI(title="Caption my Images API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(health_router)
    app.include_router(generate_router)
    return app

app = create_app()
