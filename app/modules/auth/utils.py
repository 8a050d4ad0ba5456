from passlib.context import CryptContext
from fastapi import HTTPException, Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID
import logging
import jwt
from app.core.config import settings
from app.modules.auth.schemas import AuthContext

logger = logging.getLogger(__name__)

# auto_error=False: la ausencia de token se responde con 401 desde get_current_user
bearer_scheme = HTTPBearer(auto_error=False)

ALGORITHM = settings.ALGORITHM
ACCESS_TOKEN_EXPIRE_HOURS = settings.ACCESS_TOKEN_EXPIRE_HOURS

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(password: str) -> str:
    """Hash a password using bcrypt (random salt per call)."""
    return pwd_context.hash(password)

def verify_password(plain: str, hashed: str) -> bool:
    """Verify a hashed password against a plain password."""
    if not hashed:
        return False
    return pwd_context.verify(plain, hashed)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token with an expiration time.
    If expires_delta is not provided, it defaults to ACCESS_TOKEN_EXPIRE_HOURS.
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(hours=ACCESS_TOKEN_EXPIRE_HOURS)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=ALGORITHM)


def create_user_token(user_id, username: str, role: str) -> str:
    """Token de sesión con los claims de identidad {id, username, role}."""
    return create_access_token({
        "sub": str(user_id),
        "id": str(user_id),
        "username": username,
        "role": role,
    })


def verify_token(token: str) -> dict:
    """
    Verify a JWT token and return the payload.
    Malformed, tampered and expired tokens are all rejected with 400.
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Token expirado")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Token inválido")


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> AuthContext:
    """ Build the auth context from the bearer token in the Authorization header. """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Acceso denegado. No hay token.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_token(credentials.credentials)

    try:
        return AuthContext(
            user_id=UUID(payload.get("id") or payload.get("sub")),
            username=payload["username"],
            role=payload.get("role", "user"),
        )
    except (KeyError, TypeError, ValueError):
        logger.warning("Token with missing or malformed identity claims")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Token inválido")
