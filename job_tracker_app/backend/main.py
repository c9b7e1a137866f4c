import logging

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

from .config.settings import get_settings
from .utils.logging_config import setup_logging

# Initialize settings
settings = get_settings()

# Setup logging configuration
setup_logging(
    level=settings.log_level,
    log_file=settings.log_file
)
logger = logging.getLogger(__name__)

# Missing database URL or session secret is fatal
missing_settings = settings.validate_required_settings()
if missing_settings:
    for setting in missing_settings:
        logger.error("Configuration error: %s", setting)
    raise RuntimeError("Invalid configuration: " + "; ".join(missing_settings))

from .api import auth, jobs, health
from .errors import AppError, ValidationError
from .models.db.database import engine, Base, SessionLocal
from .services import session_store
from .models.db import user as user_model  # noqa: F401
from .models.db import job as job_model  # noqa: F401
from .models.db import session as session_model  # noqa: F401

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    docs_url="/docs" if settings.api_docs_enabled else None,
    redoc_url="/redoc" if settings.api_docs_enabled else None,
)

if settings.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(AppError)
def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    error = ValidationError(errors=errors)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(HTTPException)
def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


# Routers
app.include_router(health.router, prefix="/api", tags=["Health Check"])
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(jobs.router, prefix="/api/jobs", tags=["Job Applications"])


@app.on_event("startup")
def on_startup():
    """Create database tables and drop sessions that expired while down.

    An unreachable database stops the process.
    """
    logger.info("Starting %s...", settings.app_name)
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception("Database connection failed during startup")
        raise
    logger.info("Database tables initialized successfully")

    db = SessionLocal()
    try:
        session_store.purge_expired_sessions(db)
    finally:
        db.close()


@app.get("/")
def read_root():
    return {"message": f"Welcome to the {settings.app_name} API"}
