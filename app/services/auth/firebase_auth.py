"""Firebase Authentication Service Module

This module resolves the calling user from a Firebase ID token. User
accounts themselves are managed by Firebase; the interview service only
needs the verified UID to scope every session to its owner.

The Firebase app is initialized on first use so importing this module never
requires credentials to be present.

Dependencies:
- firebase_admin: For Firebase ID token verification.
- fastapi: For the request object used as a dependency.
- loguru: For logging operations.
- app.core.config: For the credentials path.
- app.errors.exceptions: For unauthorized errors.
"""

import os
import threading
from typing import Optional, Tuple

import firebase_admin
from firebase_admin import auth, credentials
from fastapi import Request
from loguru import logger

from app.core.config import FIREBASE_CREDENTIALS_PATH
from app.errors.exceptions import Unauthorized

_init_lock = threading.Lock()


def _ensure_firebase_app() -> None:
    """Initialize the default Firebase app once."""
    try:
        firebase_admin.get_app()
        return
    except ValueError:
        pass

    with _init_lock:
        try:
            firebase_admin.get_app()
            return
        except ValueError:
            pass

        if FIREBASE_CREDENTIALS_PATH:
            if not os.path.exists(FIREBASE_CREDENTIALS_PATH):
                logger.error(f"Firebase credentials file not found at {FIREBASE_CREDENTIALS_PATH}")
                raise FileNotFoundError(f"Firebase credentials file not found at {FIREBASE_CREDENTIALS_PATH}")
            firebase_admin.initialize_app(credentials.Certificate(FIREBASE_CREDENTIALS_PATH))
        else:
            # Falls back to Application Default Credentials
            firebase_admin.initialize_app()
        logger.info("Firebase app initialized")


def verify_id_token(id_token: str) -> Tuple[Optional[dict], Optional[str]]:
    """Verify Firebase ID token and extract user information.

    Args:
        id_token (str): Firebase ID token to verify

    Returns:
        tuple: (decoded_token, uid) if valid, (None, None) if invalid

    Note:
        Checks if token is revoked using check_revoked=True parameter
    """
    _ensure_firebase_app()
    try:
        decoded_token = auth.verify_id_token(id_token, check_revoked=True)
        return decoded_token, decoded_token['uid']
    except (auth.InvalidIdTokenError, auth.ExpiredIdTokenError, auth.RevokedIdTokenError, auth.UserDisabledError) as e:
        logger.warning(f"Rejected Firebase ID token: {e}")
        return None, None


def get_current_user_uid(request: Request) -> str:
    """Extract and verify Firebase ID token from request headers.

    Used as a FastAPI dependency on every mock interview route.

    Returns:
        str: Firebase UID of the authenticated user

    Raises:
        Unauthorized: If the authorization header is missing, invalid, or the token is expired
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise Unauthorized("Missing or invalid authorization header")

    token = auth_header.split(" ", 1)[1].strip()
    _, uid = verify_id_token(token)
    if not uid:
        raise Unauthorized("Invalid or expired token")

    return uid
