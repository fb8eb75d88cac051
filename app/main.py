import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import health, subscriptions, users
from app.api.middleware import LoggingMiddleware
from app.core.database import close_engine, create_db_and_tables
from app.core.config import settings
from app.core.exceptions import EntityNotFoundError, InternalServiceError, InvalidInputError
from app.core.logging import configure_logging
from app.schemas.subscription import (
    ERR_INTERNAL,
    ERR_INVALID_BODY,
    ERR_INVALID_DATE,
    ERR_INVALID_ID,
    ERR_INVALID_ID_FORMAT,
    ERR_INVALID_PAGINATION,
    ERR_INVALID_USER_ID,
)

configure_logging()
logger = logging.getLogger("subscriptions-api")

# Mensaje por parámetro cuando la validación de FastAPI falla en path/query
PARAM_ERRORS = {
    "subscription_id": ERR_INVALID_ID_FORMAT,
    "user_id": ERR_INVALID_USER_ID,
    "limit": ERR_INVALID_PAGINATION,
    "offset": ERR_INVALID_PAGINATION,
}
DATE_FIELDS = {"start_date", "end_date"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"starting {settings.PROJECT_NAME} | {settings.log_summary()}")
    create_db_and_tables()
    yield
    close_engine()
    logger.info("database pool closed")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="CRUD de suscripciones de usuarios y cálculo del costo total por periodo",
    version="1.0.0",
    lifespan=lifespan,
)


def validation_message(exc: RequestValidationError) -> str:
    """Traduce el primer error de validación al mensaje que ve el cliente"""
    errors = exc.errors()
    if not errors:
        return ERR_INVALID_BODY
    error = errors[0]
    loc = error.get("loc", ())
    source = loc[0] if loc else "body"
    field = loc[-1] if len(loc) > 1 else None

    if source in ("path", "query"):
        if field == "subscription_id" and error.get("type") == "greater_than":
            return ERR_INVALID_ID
        return PARAM_ERRORS.get(field, ERR_INVALID_BODY)

    # Errores lanzados por nuestros validators (precio, fechas)
    if error.get("type") == "value_error":
        ctx_error = error.get("ctx", {}).get("error")
        if ctx_error is not None:
            return str(ctx_error)
    if field in DATE_FIELDS:
        return ERR_INVALID_DATE
    return ERR_INVALID_BODY


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": validation_message(exc)})

@app.exception_handler(InvalidInputError)
async def invalid_input_exception_handler(request: Request, exc: InvalidInputError):
    return JSONResponse(status_code=400, content={"error": exc.message})

@app.exception_handler(EntityNotFoundError)
async def entity_not_found_exception_handler(request: Request, exc: EntityNotFoundError):
    return JSONResponse(status_code=404, content={"error": exc.message})

@app.exception_handler(InternalServiceError)
async def internal_exception_handler(request: Request, exc: InternalServiceError):
    return JSONResponse(status_code=500, content={"error": ERR_INTERNAL})

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail).lower()}, headers=exc.headers)

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": ERR_INTERNAL})


app.add_middleware(LoggingMiddleware)

app.include_router(subscriptions.router)
app.include_router(users.router)
app.include_router(health.router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
