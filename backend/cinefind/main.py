import logging
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cinefind.routers import health, movies
from cinefind.core.config import get_settings
from cinefind.core.exceptions import BaseAppException, InvalidRequestException, RouteNotFoundException
from cinefind.db import Base, engine
from cinefind import models  # ensure models are imported

settings = get_settings()
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="CineFind API",
    description="Movie discovery proxy for the OMDb API",
    version="1.0.0"
)

# CORS for the browser front end
origins_env = settings.CORS_ALLOW_ORIGINS or ""
origins = [o.strip() for o in origins_env.split(",") if o.strip()] or [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3001",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(movies.router)


@app.exception_handler(BaseAppException)
async def handle_app_exception(request: Request, exc: BaseAppException):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    # Unknown paths and unsupported methods both count as unmatched routes
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        error = RouteNotFoundException()
        return JSONResponse(status_code=error.status_code, content=error.to_dict())
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    error = InvalidRequestException(
        "Invalid request parameters",
        details=jsonable_encoder(exc.errors()),
    )
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "details": str(exc)},
    )


@app.on_event("startup")
async def init_db():
    # Watchlist key-value table for the sql storage backend (idempotent)
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
