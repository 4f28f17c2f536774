"""FastAPI application entry point."""

import logging
import sys
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from toolshare.api import auth, borrowings, tools, users
from toolshare.config import get_settings
from toolshare.database import close_db, init_db
from toolshare.services.errors import ServiceError

settings = get_settings()

API_VERSION = "1.0.0"

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database at startup and release it on shutdown."""
    init_db()
    logger.info(f"Tooling API started ({settings.environment})")
    yield
    close_db()


app = FastAPI(
    title="Tooling Application API",
    description="Lend and borrow tools between registered users",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start
    logger.info(
        f"{request.method} {request.url.path} {response.status_code} {elapsed * 1000:.1f}ms"
    )
    return response


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Map tagged service failures to HTTP responses."""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


# Register routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(tools.router)
app.include_router(borrowings.router)


@app.get("/")
async def root():
    """Welcome message with the main endpoints."""
    return {
        "message": "Welcome to the Tooling Application API",
        "version": API_VERSION,
        "endpoints": {
            "health": "/health",
            "hello": "/hello",
            "auth": "/api/v1/auth",
            "users": "/api/v1/users",
            "tools": "/api/v1/tools",
            "borrowings": "/api/v1/borrowings",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "environment": settings.environment,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@app.get("/hello")
async def hello():
    """Sample greeting endpoint."""
    return {"message": "Hello from the API!", "version": API_VERSION}


if __name__ == "__main__":
    uvicorn.run(
        "toolshare.main:app",
        host="0.0.0.0",  # noqa: S104
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
