"""
Description:
Module for adding CORS middleware to FastAPI application.

Arguments:
- app: FastAPI application instance to which CORS middleware will be added.

Dependencies:
- fastapi: For CORS middleware functionality.
- loguru: For logging information about the middleware setup.
- app.core.config: For the allowed origins.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from app.core.config import CORS_ORIGINS

def add_cors_middleware(app: FastAPI):
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info(f"CORS middleware added for {len(CORS_ORIGINS)} origin(s)")
