"""
FastAPI application.

Mounts the render routes and permissive CORS for the browser client.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import settings
from shared.logging import get_logger
from api_gateway.routes import render

logger = get_logger("api_gateway")

app = FastAPI(
    title="jobreel",
    description="Turns a job posting into a short vertical recruiting video",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(render.router)

logger.info("API gateway initialized", extra={"environment": settings.environment})
