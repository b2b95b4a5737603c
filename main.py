import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eventdesk.api import events, tickets
from eventdesk.core.config import settings
from eventdesk.core.database import Database
from eventdesk.core.exceptions import DomainError, InvalidRequest
from eventdesk.storage.object_store import LocalObjectStore

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tests install their own handles before startup
    if not hasattr(app.state, "database"):
        app.state.database = Database(
            settings.DATABASE_URL,
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            echo=settings.DEBUG,
        )
        app.state.database.create_all()
    if not hasattr(app.state, "object_store"):
        app.state.object_store = LocalObjectStore(
            settings.STORAGE_ROOT,
            settings.STORAGE_PUBLIC_BASE_URL,
        )

    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} started")
    yield

    app.state.database.dispose()
    logger.info(f"{settings.PROJECT_NAME} stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.info(f"Validation error on {request.url.path}: {errors}")
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    error = InvalidRequest(f"{field}: {message}" if field else message)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


app.include_router(events.router)
app.include_router(tickets.router)


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION
    }
