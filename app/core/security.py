import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from fastapi import Cookie, Depends, Header, Response
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.core.config import AUTH_COOKIE_NAME, AppSettings
from app.core.errors import AuthenticationError, HashingError
from app.dependencies import get_settings

logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 12
BEARER_PREFIX = "Bearer "

# Manejo de contraseñas
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class SessionClaims(BaseModel):
    sub: str
    email: str
    iat: datetime
    exp: datetime


@lru_cache(maxsize=None)
def _hashing_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


# Funciones de seguridad
def get_password_hash(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    try:
        return _hashing_context(rounds).hash(password)
    except (ValueError, TypeError) as exc:
        raise HashingError("Password hashing failed") from exc


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Devuelve False si no coincide; solo lanza si el hash no se puede procesar."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as exc:
        raise HashingError("Password verification failed") from exc


def create_access_token(
    data: dict,
    secret: str,
    expires_delta: timedelta,
    algorithm: str = "HS256",
    now: Optional[datetime] = None,
) -> str:
    if expires_delta <= timedelta(0):
        raise ValueError("expires_delta must be positive")

    issued_at = now or datetime.now(timezone.utc)
    to_encode = data.copy()
    to_encode.update({
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + expires_delta).timestamp()),
    })
    return jwt.encode(to_encode, secret, algorithm=algorithm)


def decode_access_token(
    token: str,
    secret: str,
    algorithm: str = "HS256",
    now: Optional[datetime] = None,
) -> Optional[SessionClaims]:
    """
    Verifica firma y vigencia. Cualquier fallo (firma, formato, expiración)
    se reporta igual: None.
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
        claims = SessionClaims(**payload)
    except (JWTError, PydanticValidationError, TypeError) as exc:
        logger.debug("Token rejected: %s", exc.__class__.__name__)
        return None

    current = now or datetime.now(timezone.utc)
    if current >= claims.exp:
        logger.debug("Token rejected: expired")
        return None
    return claims


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):]
    if not token or any(char.isspace() for char in token):
        return None
    return token


def issue_session_token(user_id: str, email: str, settings: AppSettings) -> str:
    return create_access_token(
        data={"sub": user_id, "email": email},
        secret=settings.jwt_secret,
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
        algorithm=settings.jwt_algorithm,
    )


def set_auth_cookie(response: Response, token: str, settings: AppSettings) -> None:
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        max_age=settings.access_token_ttl_seconds,
        path="/",
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(key=AUTH_COOKIE_NAME, path="/")


def get_current_claims(
    authorization: Optional[str] = Header(None),
    auth_token: Optional[str] = Cookie(None, alias=AUTH_COOKIE_NAME),
    settings: AppSettings = Depends(get_settings),
) -> SessionClaims:
    token = extract_bearer_token(authorization) or auth_token
    if not token:
        raise AuthenticationError("Authentication required")

    claims = decode_access_token(token, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    if claims is None:
        raise AuthenticationError("Invalid token")
    return claims


def get_current_user(claims: SessionClaims = Depends(get_current_claims)) -> str:
    return claims.sub
