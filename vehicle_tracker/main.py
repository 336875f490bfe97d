"""
Point d'entree FastAPI / FastAPI entry point.
Vehicle Tracker - suivi de position des vehicules.
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from vehicle_tracker.api import AVAILABLE_ENDPOINTS, api_router
from vehicle_tracker.config import settings
from vehicle_tracker.database import async_session, engine, init_db
from vehicle_tracker.exceptions import TrackerError
from vehicle_tracker.rate_limit import limiter
from vehicle_tracker.utils.seed import seed_demo_vehicles

logger = logging.getLogger("vehicle_tracker")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialisation et fermeture / Startup and shutdown."""
    # Creer les tables au demarrage / Create tables on startup
    await init_db()
    # Vehicules de demo si demande / Demo vehicles if requested
    if settings.SEED_DEMO_VEHICLES:
        async with async_session() as session:
            await seed_demo_vehicles(session, settings.DEMO_VEHICLE_COUNT)
    logger.info("%s %s started (%s)", settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)
    yield
    await engine.dispose()
    logger.info("Database connections closed")


# Desactiver Swagger en production / Disable Swagger in production
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Suivi de position des vehicules / Vehicle location tracking",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Journalise chaque requete / Log every request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response


app.add_middleware(RequestLoggingMiddleware)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Ajoute un X-Request-ID unique a chaque requete / Add unique X-Request-ID to each request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


app.add_middleware(RequestIDMiddleware)


# --- Gestion des erreurs / Error handling ---
def _error_response(status_code: int, error: str, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "message": message, **extra},
    )


@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    """Erreurs metier -> enveloppe JSON / Domain errors -> JSON envelope."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error_response(exc.status_code, exc.title, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Corps de requete invalide -> 400 / Invalid request body -> 400."""
    details = [
        f"{'.'.join(str(part) for part in err.get('loc', ()) if part != 'body')}: {err.get('msg')}".lstrip(": ")
        for err in exc.errors()
    ]
    return _error_response(400, "Validation error", "; ".join(details) or "Invalid request")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Routes inconnues et erreurs HTTP / Unknown routes and HTTP errors."""
    if exc.status_code == 404:
        logger.info("404 - Route not found: %s %s", request.method, request.url.path)
        return _error_response(
            404,
            "Route not found",
            f"Cannot {request.method} {request.url.path}",
            availableEndpoints=AVAILABLE_ENDPOINTS,
        )
    return _error_response(exc.status_code, "HTTP error", str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Erreur inattendue -> 500 generique / Unexpected error -> generic 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if settings.DEBUG else "Something went wrong!"
    response = _error_response(500, "Internal Server Error", message)
    # Hors de RequestIDMiddleware / Runs outside RequestIDMiddleware
    request_id = getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID", str(uuid.uuid4()))
    response.headers["X-Request-ID"] = request_id
    return response


# Routes API
app.include_router(api_router)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# Sante de l'API / API health check
@app.get("/health")
async def health():
    """Health check avec la liste des endpoints / Health check listing endpoints."""
    return {
        "status": "OK",
        "message": "Vehicle Tracking Server is running",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": _now_iso(),
        "endpoints": {
            "health": "GET /health",
            "vehicles": "GET /api/vehicles",
            "register": "POST /api/users/register",
            "login": "POST /api/users/login",
        },
    }


@app.get("/test")
async def test_endpoint():
    """Verification rapide / Quick liveness check."""
    return {"message": "Backend server is working!", "timestamp": _now_iso()}


# Logging JSON structure en production / Structured JSON logging in production
class JSONFormatter(logging.Formatter):
    def format(self, record):
        log_entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging() -> None:
    """JSON en production, texte sinon / JSON in production, plain text otherwise."""
    handler = logging.StreamHandler()
    if settings.DEBUG:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(JSONFormatter())
    logging.root.handlers = [handler]
    logging.root.setLevel(logging.INFO)


if not settings.DEBUG:
    configure_logging()
