# storefront/main.py
import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.core.config import get_settings
from storefront.database import create_data_files
from storefront.schemas.common import HealthRead

# Routers
from storefront.routers.products import router as products_router
from storefront.routers.orders import router as orders_router
from storefront.routers.contact import router as contact_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")

STARTED_AT = time.monotonic()

UNKNOWN_ROUTE_MESSAGE = "Route API introuvable."
INVALID_JSON_MESSAGE = "Corps de requête JSON invalide."
INVALID_REQUEST_MESSAGE = "Requête invalide."
SERVER_ERROR_MESSAGE = "Erreur serveur inattendue."


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Create orders.json / messages.json if missing.

    Shutdown:
      - Nothing to release, every request opens and closes its files.
    """
    current = get_settings()
    logger.info("🔄 Startup: checking data files in %s", current.DATA_DIR)
    try:
        create_data_files(current)
        logger.info("✅ Startup: data files ready.")
    except Exception as e:
        logger.error(f"❌ Startup: cannot prepare data files: {e}")
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error envelope: {"success": false, "error": "..."} ---


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code >= 500:
        return _error(exc.status_code, SERVER_ERROR_MESSAGE)
    message = exc.detail if isinstance(exc.detail, str) else INVALID_REQUEST_MESSAGE
    return _error(exc.status_code, message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    if any(err.get("type") == "json_invalid" for err in exc.errors()):
        return _error(status.HTTP_400_BAD_REQUEST, INVALID_JSON_MESSAGE)
    return _error(status.HTTP_400_BAD_REQUEST, INVALID_REQUEST_MESSAGE)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("[API error] %s %s", request.method, request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)


# --- API ---


@app.get(f"{settings.API_PREFIX}/health", response_model=HealthRead)
def health():
    """Health check endpoint."""
    return HealthRead(uptime=time.monotonic() - STARTED_AT)


app.include_router(products_router, prefix=settings.API_PREFIX)
app.include_router(orders_router, prefix=settings.API_PREFIX)
app.include_router(contact_router, prefix=settings.API_PREFIX)


# Must stay after every API router: anything else under /api is a 404
@app.api_route(
    settings.API_PREFIX,
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    include_in_schema=False,
)
@app.api_route(
    f"{settings.API_PREFIX}/{{path:path}}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    include_in_schema=False,
)
def unknown_api_route():
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=UNKNOWN_ROUTE_MESSAGE)


# Static front-end, if one is deployed next to the API
if settings.PUBLIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=settings.PUBLIC_DIR, html=True), name="public")


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    logger.info(f"Sushii API en ligne -> http://localhost:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
