"""Event Planner API."""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.database import create_db_and_tables
from app.core.errors import DomainError
from app.core.logging import setup_logging
from app.routes import ai, events, guests, tasks, users

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    # Startup
    if not settings.jwt_secret:
        raise RuntimeError("JWT_SECRET must be set before the API can start")
    logger.info("Starting Event Planner application")
    create_db_and_tables()
    yield
    # Shutdown
    logger.info("Event Planner application shut down")


app = FastAPI(
    title=settings.app_name,
    description="Plan events, invite guests, track RSVPs and tasks, and get AI suggestions",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for the browser client
origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(users.router)
app.include_router(events.router)
app.include_router(guests.router)
app.include_router(tasks.router)
app.include_router(ai.router)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    """Map service errors to their HTTP status with a user-safe message."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """
    Answer malformed input with 400 instead of FastAPI's default 422.

    A malformed id in the path cannot name an existing resource, so it gets
    the same 404 as a missing one.
    """
    errors = exc.errors()
    if any(err.get("loc", ())[:1] == ("path",) for err in errors):
        return JSONResponse(status_code=404, content={"message": "Not found"})

    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ())[1:]) or 'body'}: {err.get('msg')}"
        for err in errors
    )
    return JSONResponse(status_code=400, content={"message": f"Invalid request: {details}"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Log unexpected failures server-side and hide the details from clients."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} "
        f"({duration_ms:.1f} ms)"
    )
    return response


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
