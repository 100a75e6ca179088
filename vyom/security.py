import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import HTTPException, Request, status

from vyom.config import config
from vyom.schemas.users import TokenUser

logger = logging.getLogger(__name__)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)
    return encoded_jwt


def token_for_user(user) -> str:
    """Issue an access token carrying the claims every service relies on"""
    return create_access_token(
        data={
            "user_id": user.id,
            "uuid": user.uuid,
            "email": user.email,
            "role": user.role,
        }
    )


def decode_access_token(token: str) -> TokenUser:
    """Verify a token and return its identity; raises jwt.PyJWTError on failure"""
    payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    try:
        return TokenUser(
            user_id=payload["user_id"],
            uuid=payload["uuid"],
            email=payload["email"],
            role=payload.get("role", "USER"),
        )
    except (KeyError, ValueError) as exc:
        raise jwt.InvalidTokenError("Token is missing required claims") from exc


def bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("authorization")
    if not auth_header:
        return None
    parts = auth_header.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        return None
    return parts[1].strip()


async def get_current_user(request: Request) -> TokenUser:
    """Dependency that authenticates the caller from the Authorization header"""
    token = bearer_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required"
        )

    try:
        return decode_access_token(token)
    except jwt.PyJWTError as exc:
        logger.info("Rejected access token: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token"
        )


def hash_password(password: str) -> str:
    """Hash a password using bcrypt"""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=12)).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    try:
        return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
