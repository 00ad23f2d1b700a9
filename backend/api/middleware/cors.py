"""
CORS (Cross-Origin Resource Sharing) middleware configuration.

The draft board front end usually runs on its own dev-server port.
"""

from typing import Optional, Sequence
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

DEFAULT_ORIGINS = (
    "http://localhost:3000",    # Next.js / React dev server
    "http://localhost:8080",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:8080",
)


def setup_cors(app: FastAPI, allowed_origins: Optional[Sequence[str]] = None):
    """
    Configure CORS middleware for the FastAPI application.

    Args:
        app: FastAPI application instance
        allowed_origins: Allowed origins, defaults to local dev servers
    """
    origins = list(allowed_origins) if allowed_origins is not None else list(DEFAULT_ORIGINS)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Process-Time"],
    )
