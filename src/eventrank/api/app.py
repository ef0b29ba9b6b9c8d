# src/eventrank/api/app.py
"""
FastAPI application wiring.

This file creates the `FastAPI` instance and installs CORS.
Business logic lives in `eventrank.api.routes` and `eventrank.recommender`.
"""

from __future__ import annotations

import os

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from eventrank.core.logging import configure_logging

from .routes import router

configure_logging()

app = FastAPI(title="EventRank API", version="0.1.0")

# Configure via env:
# - EVENTRANK_CORS_ORIGINS="http://localhost:3000,http://127.0.0.1:3000"
cors_origins = [s.strip() for s in os.getenv("EVENTRANK_CORS_ORIGINS", "").split(",") if s.strip()]
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

app.include_router(router)
