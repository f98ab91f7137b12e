"""
Access tokens - HS256 bearer tokens naming the user they were issued to.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from music_commerce.errors import UnauthorizedError
from music_commerce.settings import Settings, get_settings

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"


def create_access_token(
    user_id: str,
    settings: Optional[Settings] = None,
    expires_in: Optional[timedelta] = None,
) -> str:
    """
    Sign an access token for ``user_id``.

    Args:
        user_id: Id of the user the token authenticates
        settings: Settings holding secret and algorithm (defaults to get_settings())
        expires_in: Lifetime override (defaults to access_token_expire_minutes)

    Returns:
        Encoded JWT
    """
    cfg = settings or get_settings()
    now = datetime.now(timezone.utc)
    lifetime = expires_in if expires_in is not None else timedelta(minutes=cfg.access_token_expire_minutes)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + lifetime,
        "type": ACCESS_TOKEN_TYPE,
    }
    return jwt.encode(payload, cfg.jwt_secret.get_secret_value(), algorithm=cfg.jwt_algorithm)


def read_access_token(token: str, settings: Optional[Settings] = None) -> str:
    """
    Verify a token and return the user id it was issued to.

    Raises:
        UnauthorizedError: signature, expiry or token type is invalid
    """
    cfg = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            cfg.jwt_secret.get_secret_value(),
            algorithms=[cfg.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired access token")
        raise UnauthorizedError()
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected invalid access token: {e}")
        raise UnauthorizedError()

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise UnauthorizedError()
    return str(payload["sub"])
