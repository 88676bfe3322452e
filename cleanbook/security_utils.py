"""
Security Utilities
Credential hashing for collaborator accounts and signed bearer tokens
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError
from jose import jwt as jose_jwt
from passlib.context import CryptContext

from .config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, SECRET_KEY

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ----------------------------------------------------------------------------
# Credentials
# ----------------------------------------------------------------------------


def hash_password_bcrypt(password: str) -> str:
    return pwd_context.hash(password)


def verify_password_bcrypt(plain_password: str, hashed_password: Optional[str]) -> bool:
    """False for an empty secret, a missing hash or a hash passlib cannot read"""
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError as e:
        logger.error(f"❌ Unreadable password hash: {e}")
        return False


class BcryptCredentialVerifier:
    """Hash-and-compare capability injected into the collaborator service"""

    def hash(self, secret: str) -> str:
        return hash_password_bcrypt(secret)

    def verify(self, secret: str, hashed: Optional[str]) -> bool:
        return verify_password_bcrypt(secret, hashed)


# ----------------------------------------------------------------------------
# Bearer tokens
# ----------------------------------------------------------------------------


def create_jwt_token(claims: dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign claims into a JWT.

    Args:
        claims: sub/role/name of the actor
        expires_delta: lifetime, ACCESS_TOKEN_EXPIRE_MINUTES when omitted
    """
    lifetime = expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {**claims, "exp": datetime.now(timezone.utc) + lifetime}
    return jose_jwt.encode(payload, SECRET_KEY, algorithm=JWT_ALGORITHM)


def verify_jwt_token(token: str) -> Optional[dict[str, Any]]:
    """Decoded claims, or None when the signature is bad or the token expired"""
    try:
        return jose_jwt.decode(token, SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"⚠️ Rejected bearer token: {e}")
        return None
