"""
Description:
This module sets up a rate limiter for the application using SlowAPI.
Clients are identified by IP address. Routes opt in with ``@limiter.limit``.

Dependencies:
- slowapi: For rate limiting functionality.
- loguru: For logging information about the rate limiter initialization.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from loguru import logger
from app.core.config import DEFAULT_RATE_LIMIT

limiter = Limiter(key_func=get_remote_address, default_limits=[DEFAULT_RATE_LIMIT])
logger.info(f"Rate limiter initialized with default limit {DEFAULT_RATE_LIMIT}")
