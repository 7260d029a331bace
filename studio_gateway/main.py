"""
FastAPI application entry point.
Main application instance with middleware and route configuration.
"""
from fastapi import FastAPI, Request, status, Depends, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.concurrency import run_in_threadpool
import logging

from studio_gateway.config import settings
from studio_gateway.routes import admin, categories, chatbot, film_strip, hero_sections, news, portfolio, site
from studio_gateway.services.backend_client import BackendClient, close_backend_client, get_backend_client
from studio_gateway.services.mailer import BookingMailer, get_mailer
from studio_gateway.utils.auth import admin_redirect_for
from studio_gateway.utils.rate_limit import limiter

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI application instance
app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
)

# Rate limiter state used by the @limiter.limit decorators
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS Middleware Configuration
# The admin cookie travels with credentialed requests, so origins are listed explicitly
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,  # Cache preflight requests for 1 hour
)


@app.middleware("http")
async def guard_admin_pages(request: Request, call_next):
    """Send visitors without a session to the login page, and logged-in admins past it."""
    has_token = bool(request.cookies.get(settings.ADMIN_COOKIE_NAME))
    target = admin_redirect_for(request.url.path, has_token)
    if target:
        logger.debug(f"Redirecting {request.url.path} to {target}")
        return RedirectResponse(url=target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    return await call_next(request)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log incoming requests and their response status."""
    method = request.method
    path = request.url.path
    origin = request.headers.get("origin", "No origin header")

    logger.debug(f"Incoming {method} request to {path} from origin: {origin}")

    try:
        response = await call_next(request)
        logger.info(f"Response status: {response.status_code} for {method} {path}")
        return response
    except Exception as e:
        logger.error(
            f"Error processing {method} {path}: {str(e)}\n"
            f"  Origin: {origin}\n"
            f"  Error type: {type(e).__name__}",
            exc_info=True
        )
        raise


# Include routers
app.include_router(categories.router, prefix="/api")
app.include_router(film_strip.router, prefix="/api")
app.include_router(hero_sections.router, prefix="/api")
app.include_router(news.router, prefix="/api")
app.include_router(portfolio.router, prefix="/api")
app.include_router(admin.router, prefix="/api")
app.include_router(chatbot.router, prefix="/api")
app.include_router(site.router, prefix="/api")

# Built admin frontend, served behind the session guard above
if settings.ADMIN_STATIC_DIR:
    app.mount("/admin", StaticFiles(directory=settings.ADMIN_STATIC_DIR, html=True), name="admin")


# Exception Handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions (401, 404, relayed backend errors, etc.)."""
    logger.error(
        f"HTTPException on {request.method} {request.url.path}:\n"
        f"  Status: {exc.status_code}\n"
        f"  Detail: {exc.detail}"
    )

    # Handle both string and dict detail formats
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail, "detail": str(exc.detail)}

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    """Handle request validation errors."""
    logger.error(
        f"Validation error on {request.method} {request.url.path}:\n"
        f"  Errors: {exc.errors()}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Validation error",
            "detail": jsonable_errors(exc),
        }
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Strip non-serializable context (exception objects) from validation errors."""
    return [
        {key: value for key, value in error.items() if key in ("type", "loc", "msg")}
        for error in exc.errors()
    ]


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}:\n"
        f"  Error: {str(exc)}\n"
        f"  Error type: {type(exc).__name__}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred"
        }
    )


# Root Endpoints
@app.get("/")
async def root():
    """Root endpoint - API health check."""
    return {
        "message": settings.API_TITLE,
        "status": "healthy",
        "version": settings.API_VERSION
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/health/backend")
async def health_check_backend(client: BackendClient = Depends(get_backend_client)):
    """
    Content backend health check endpoint.
    Reports whether the backend host answers at all.
    """
    reachable = await run_in_threadpool(client.ping)
    if reachable:
        return {"backend": "reachable", "status": "healthy", "url": client.base_url}
    return {
        "backend": "unreachable",
        "status": "unhealthy",
        "error": "Content API did not respond"
    }


@app.get("/health/smtp")
async def health_check_smtp(mailer: BookingMailer = Depends(get_mailer)):
    """
    SMTP health check endpoint.
    Validates mail configuration without opening a connection.
    """
    if mailer.is_configured and mailer.admin_email:
        return {"smtp": "configured", "status": "healthy", "host": mailer.host}
    return {
        "smtp": "not_configured",
        "status": "warning",
        "message": "SMTP_HOST or ADMIN_EMAIL not set in environment variables"
    }


@app.on_event("startup")
async def startup_event():
    logger.info(f"CORS allowed origins: {settings.CORS_ORIGINS}")
    logger.info(f"Proxying content API at {settings.API_URL}")
    if not settings.SMTP_HOST:
        logger.warning("SMTP_HOST not configured - booking emails will fail")


@app.on_event("shutdown")
async def shutdown_event():
    close_backend_client()
