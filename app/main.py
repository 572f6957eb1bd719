import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.api import auth, categories, dashboard, transactions, user
from app.core.config import AppSettings, load_settings
from app.core.errors import AppError
from app.core.logging_config import setup_logging
from app.store.client import StoreClient, StoreError, StoreNotFoundError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            # No filtramos detalles internos al cliente
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
            return _error(exc.status_code, INTERNAL_ERROR_MESSAGE)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StoreNotFoundError)
    async def store_not_found_handler(request: Request, exc: StoreNotFoundError):
        return _error(404, "Resource not found")

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error("Store call failed on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(500, INTERNAL_ERROR_MESSAGE)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
        else:
            message = "Invalid request"
        return _error(400, message)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, INTERNAL_ERROR_MESSAGE)


def create_app(settings: Optional[AppSettings] = None, store: Optional[StoreClient] = None) -> FastAPI:
    setup_logging()
    # Sin JWT_SECRET en producción esto falla aquí, al arrancar
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s (%s)", settings.project_name, settings.environment)
        owned_store = None
        if getattr(app.state, "store", None) is None:
            owned_store = StoreClient.from_settings(settings)
            app.state.store = owned_store
        yield
        logger.info("Shutting down")
        if owned_store is not None:
            owned_store.close()

    app = FastAPI(title=settings.project_name, lifespan=lifespan)
    app.state.settings = settings
    if store is not None:
        app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(user.router, prefix=settings.api_prefix)
    app.include_router(categories.router, prefix=settings.api_prefix)
    app.include_router(transactions.router, prefix=settings.api_prefix)
    app.include_router(dashboard.router, prefix=settings.api_prefix)

    @app.get("/")
    def root():
        return {"message": f"Servidor de {settings.project_name}"}

    return app


app = create_app()
