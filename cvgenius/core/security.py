import logging
from datetime import datetime, timedelta
from typing import Optional

from jose import jwt, JWTError
from cvgenius.core import config

logger = logging.getLogger(__name__)


def create_access_token(data: dict, expires_delta: timedelta = None) -> str:
    """Mint a signed token. Used by tests and admin tooling; login lives elsewhere."""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=60))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_access_token(token: str) -> Optional[str]:
    """
    Verify a bearer token and return its subject (the user id).
    
    Returns:
        The "sub" claim, or None if the token is invalid, expired or has no subject
    """
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except JWTError as e:
        logger.debug(f"Token rejected: {e}")
        return None

    subject = payload.get("sub")
    if subject is None:
        return None
    return str(subject)
