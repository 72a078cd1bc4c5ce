"""
Docmost - Main Application.

FastAPI application hosting the Machine Control Protocol gateway and the
API-key endpoints.
"""

import logging
import sys
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docmost import __version__
from docmost.config import get_settings
from docmost.core.workspace_context import resolve_workspace
from docmost.exceptions import DocmostException, ValidationException
from docmost.modules.api_keys.router import router as api_keys_router
from docmost.modules.mcp.methods import get_registry
from docmost.modules.mcp.router import router as mcp_router
from docmost.schemas import HealthResponse

# Configure standard logging
logging.basicConfig(
    level=get_settings().app_log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("docmost")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    registry = get_registry()
    app.state.settings = settings
    app.state.registry = registry

    logger.info(
        f"Starting Docmost MCP gateway v{__version__} "
        f"[env={settings.app_env}] "
        f"[methods={len(registry)}]"
    )
    if not settings.registration_enabled:
        logger.warning("APP_SECRET is not set; API key registration is disabled")
    yield
    logger.info("Shutting down Docmost MCP gateway")


# Create FastAPI application
app = FastAPI(
    title="Docmost API",
    description="Machine Control Protocol gateway exposing Docmost spaces, pages, comments, projects and tasks over JSON-RPC 2.0.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# =============================================================================
# Middleware
# =============================================================================


async def add_request_id(request: Request, call_next):
    """Add request ID to all requests."""
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    return response


async def log_requests(request: Request, call_next):
    """Log all requests."""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.info(f"[{request_id}] {request.method} {request.url.path}")

    response = await call_next(request)

    logger.info(f"[{request_id}] {request.method} {request.url.path} -> {response.status_code}")

    return response


# Outermost first. Workspace resolution consults the exemption list before
# any lookup, and runs after the request has an id to log against.
HTTP_MIDDLEWARE = (
    add_request_id,
    log_requests,
    resolve_workspace,
)

# Starlette wraps each new middleware around the previous ones.
for middleware in reversed(HTTP_MIDDLEWARE):
    app.middleware("http")(middleware)

# CORS wraps everything so preflight requests never reach workspace resolution
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(DocmostException)
async def docmost_exception_handler(request: Request, exc: DocmostException):
    """Handle Docmost custom exceptions."""
    request_id = getattr(request.state, "request_id", None)
    logger.warning(f"DocmostException: {exc.code} - {exc.message}")

    return JSONResponse(status_code=exc.status_code, content=exc.to_content(request_id))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report body and query validation failures as 400, like other validation errors."""
    errors = [
        {"field": ".".join(str(p) for p in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
    return await docmost_exception_handler(request, ValidationException("Invalid request", errors=errors))


def _show_error_detail() -> bool:
    settings = get_settings()
    return settings.app_debug and not settings.is_production


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    request_id = getattr(request.state, "request_id", None)
    logger.exception(f"Unhandled exception on {request.url.path}")

    error = DocmostException(message=str(exc)) if _show_error_detail() else DocmostException()
    return JSONResponse(status_code=error.status_code, content=error.to_content(request_id))


# =============================================================================
# Health Check
# =============================================================================


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Health check endpoint."""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        version=__version__,
        registered_methods=len(get_registry()),
        app_env=settings.app_env,
    )


@app.get("/", tags=["health"])
async def root():
    """Root endpoint."""
    return {
        "name": "Docmost MCP gateway",
        "version": __version__,
        "docs": "/docs",
        "mcp": "/api/mcp",
    }


# =============================================================================
# Register Module Routers
# =============================================================================

app.include_router(mcp_router)
app.include_router(api_keys_router)
