import logging
from datetime import date

from fastapi import APIRouter, Depends, Response

from app.core.config import AppSettings
from app.core.errors import AuthenticationError, ConflictError, ValidationError
from app.core.security import (
    clear_auth_cookie,
    get_password_hash,
    issue_session_token,
    set_auth_cookie,
    verify_password,
)
from app.dependencies import get_settings, get_store
from app.models.user import User
from app.schemas.user import AuthResponse, UserCreate, UserLogin, UserRead
from app.store.client import StoreClient
from app.utils.store_helpers import find_user_by_email
from app.utils.validators import unique_slug, validate_registration

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


# Registro
@router.post("/register", response_model=AuthResponse)
def register(
    user_create: UserCreate,
    response: Response,
    store: StoreClient = Depends(get_store),
    settings: AppSettings = Depends(get_settings),
):
    error = validate_registration(user_create)
    if error:
        raise ValidationError(error)

    email = user_create.email.strip()
    full_name = user_create.full_name.strip()

    if find_user_by_email(store, email):
        raise ConflictError("User with this email already exists")

    hashed_pwd = get_password_hash(user_create.password, rounds=settings.bcrypt_rounds)
    created = store.insert_one(
        "users",
        title=full_name,
        slug=unique_slug(full_name),
        metadata={
            "full_name": full_name,
            "email": email,
            "password_hash": hashed_pwd,
            "dark_mode": False,
            "created_at": date.today().isoformat(),
        },
    )
    user = User.from_store(created)
    logger.info("Registered user %s", user.id)

    token = issue_session_token(user.id, user.email, settings)
    set_auth_cookie(response, token, settings)
    return AuthResponse(user=UserRead.from_user(user), token=token)


# Login
@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    response: Response,
    store: StoreClient = Depends(get_store),
    settings: AppSettings = Depends(get_settings),
):
    if not credentials.email or not credentials.password:
        raise ValidationError("Email and password are required")

    user = find_user_by_email(store, credentials.email.strip())
    # Mismo mensaje para usuario inexistente y contraseña incorrecta
    if not user or not user.password_hash or not verify_password(credentials.password, user.password_hash):
        logger.warning("Login failed for email: %s", credentials.email)
        raise AuthenticationError("Invalid credentials")

    token = issue_session_token(user.id, user.email, settings)
    set_auth_cookie(response, token, settings)
    logger.info("Login successful for user %s", user.id)
    return AuthResponse(user=UserRead.from_user(user), token=token)


@router.post("/logout")
def logout(response: Response):
    # El token sigue siendo válido hasta que expire: no hay revocación
    clear_auth_cookie(response)
    return {"message": "Logged out successfully"}
