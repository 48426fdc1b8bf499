"""
CORS configuration.

Call `configure_cors(app, settings, is_local)` to attach CORSMiddleware.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger("zonaflash")

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization", "X-Request-ID"]


def configure_cors(app: FastAPI, settings, is_local: bool):
    """Attach CORSMiddleware with the configured origins."""
    origins = settings.allowed_origins

    # Credentials only with explicit origins
    allow_credentials = "*" not in origins
    if "*" in origins and not is_local:
        logger.warning("CORS: Wildcard origin in non-local env, credentials disabled")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        max_age=3600,
    )
    logger.info("CORS allowed origins: %s", origins)
