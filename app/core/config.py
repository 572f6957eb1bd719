import os
from typing import List, Literal, Mapping, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from app.core.errors import ConfigurationError

load_dotenv()  # Carga las variables de entorno

# Solo para desarrollo local: nunca se usa con APP_ENV=production
DEV_FALLBACK_SECRET = "dev-only-insecure-secret-do-not-use-in-production"

ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24 * 7  # 7 días
AUTH_COOKIE_NAME = "auth-token"


class Settings(BaseModel):
    environment: str
    project_name: str = "Presupuesto Personal"
    api_prefix: str = "/api"

    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(default=ACCESS_TOKEN_EXPIRE_MINUTES, gt=0)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    store_api_url: str = "https://api.cosmicjs.com/v3"
    store_bucket_slug: Optional[str] = None
    store_read_key: Optional[str] = None
    store_write_key: Optional[str] = None
    store_timeout: float = 10.0

    cors_origins: List[str] = ["http://localhost:3000"]
    cookie_secure: bool = True

    @property
    def access_token_ttl_seconds(self) -> int:
        return self.access_token_expire_minutes * 60


class DevelopmentSettings(Settings):
    environment: Literal["development"] = "development"
    jwt_secret: str = DEV_FALLBACK_SECRET
    cookie_secure: bool = False


class ProductionSettings(Settings):
    environment: Literal["production"] = "production"
    # 🚩 Sin valor por defecto: la ausencia del secreto es fatal al arrancar
    jwt_secret: str = Field(min_length=32)
    store_bucket_slug: str
    store_read_key: str
    store_write_key: str


AppSettings = Union[DevelopmentSettings, ProductionSettings]

_ENV_FIELDS = {
    "JWT_SECRET": "jwt_secret",
    "JWT_ALGORITHM": "jwt_algorithm",
    "ACCESS_TOKEN_EXPIRE_MINUTES": "access_token_expire_minutes",
    "BCRYPT_ROUNDS": "bcrypt_rounds",
    "STORE_API_URL": "store_api_url",
    "STORE_BUCKET_SLUG": "store_bucket_slug",
    "STORE_READ_KEY": "store_read_key",
    "STORE_WRITE_KEY": "store_write_key",
    "STORE_TIMEOUT": "store_timeout",
}


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def load_settings(environ: Optional[Mapping[str, str]] = None) -> AppSettings:
    """
    Construye la configuración a partir de variables de entorno.

    APP_ENV debe valer "development" de forma explícita para usar el secreto
    de desarrollo; cualquier otro caso se trata como producción.
    """
    environ = os.environ if environ is None else environ
    app_env = (environ.get("APP_ENV") or "production").strip().lower()

    values = {
        field: environ[name]
        for name, field in _ENV_FIELDS.items()
        if environ.get(name)
    }
    if environ.get("CORS_ORIGINS"):
        values["cors_origins"] = _split_origins(environ["CORS_ORIGINS"])

    if app_env == "development":
        settings_cls = DevelopmentSettings
    elif app_env == "production":
        settings_cls = ProductionSettings
    else:
        raise ConfigurationError(f"APP_ENV desconocido: {app_env!r}")

    try:
        return settings_cls(**values)
    except PydanticValidationError as exc:
        missing = ", ".join(str(err["loc"][0]) for err in exc.errors())
        raise ConfigurationError(
            f"Configuración inválida para {app_env}: {missing}"
        ) from exc
