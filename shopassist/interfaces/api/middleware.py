"""FastAPI middleware configuration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shopassist.config.settings import Settings, settings


def setup_middleware(app: FastAPI, app_settings: Settings = settings) -> None:
    """
    Configure middleware for the FastAPI application.

    Args:
        app: FastAPI application instance
        app_settings: Settings carrying the CORS policy
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=app_settings.cors_allow_credentials,
        allow_methods=app_settings.cors_allow_methods,
        allow_headers=app_settings.cors_allow_headers,
    )
