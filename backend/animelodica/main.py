"""Main FastAPI application."""

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from animelodica.changeset import InvalidChangesetError
from animelodica.config import settings
from animelodica.errors import (
    changeset_error_handler,
    http_error_handler,
    internal_error_handler,
    not_found_error_handler,
    validation_error_handler,
)
from animelodica.rate_limiter import limiter
from animelodica.routers import auth, pages, settings as user_settings
from animelodica.services.repositories import NotFoundError

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Animelodica",
    description="User accounts: registration, login and session management",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add rate limiter to app state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Error envelope
app.add_exception_handler(StarletteHTTPException, http_error_handler)
app.add_exception_handler(InvalidChangesetError, changeset_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(NotFoundError, not_found_error_handler)
app.add_exception_handler(Exception, internal_error_handler)

# Signed cookie session holding the user's session token
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    session_cookie=settings.session_cookie_name,
    same_site="lax",
    https_only=settings.secure_cookies,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


app.include_router(pages.router)
app.include_router(auth.router)
app.include_router(user_settings.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("animelodica.main:app", host="0.0.0.0", port=8000, reload=True)
