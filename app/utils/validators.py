import re
import time
from typing import Optional

from app.schemas.user import UserCreate

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8


def validate_email(email: Optional[str]) -> bool:
    return bool(email) and EMAIL_RE.match(email) is not None


def validate_password(password: Optional[str]) -> Optional[str]:
    """Devuelve el motivo del rechazo, o None si la contraseña es válida."""
    password = password or ""
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    if not re.search(r"[a-z]", password):
        return "Password must contain at least one lowercase letter"
    if not re.search(r"[A-Z]", password):
        return "Password must contain at least one uppercase letter"
    if not re.search(r"\d", password):
        return "Password must contain at least one number"
    return None


def validate_registration(data: UserCreate) -> Optional[str]:
    if not data.full_name or len(data.full_name.strip()) < 2:
        return "Full name must be at least 2 characters long"
    if not validate_email(data.email):
        return "Please enter a valid email address"
    password_error = validate_password(data.password)
    if password_error:
        return password_error
    if data.password != data.confirm_password:
        return "Passwords do not match"
    return None


def generate_slug(text: str) -> str:
    slug = text.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")


def unique_slug(*parts: str) -> str:
    """Slug con sufijo de milisegundos, como hace el almacén para objetos nuevos."""
    stamp = str(int(time.time() * 1000))
    return generate_slug("-".join([*parts, stamp]))
