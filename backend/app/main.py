"""
FastAPI entrypoint for Nineteen Finance backend application.
"""
import logging
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.exceptions import ServiceError, ValidationError
from app.core.utils import format_error
from app.api.router import api_router
from app.db.session import get_db

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Nineteen Finance API",
    description="Backend API for personal bookkeeping with friend sharing",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its response status."""
    response = await call_next(request)
    logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
    return response


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Translate domain errors into their HTTP status."""
    return JSONResponse(
        status_code=exc.status_code,
        content=format_error(exc.message, exc.kind)
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Render malformed request bodies like other validation errors."""
    details = [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=ValidationError.status_code,
        content=format_error("Invalid request", ValidationError.kind, details)
    )


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Service descriptor."""
    return {
        "message": "Nineteen Finance API",
        "version": app.version,
        "endpoints": {
            "health": "/health",
            "auth": "/api/auth/google",
            "users": "/api/users/{user_id}",
            "search_user": "/api/users/search/{email}",
            "friends": "/api/users/{user_id}/friends",
            "friend_requests": "/api/users/{user_id}/friend-requests",
            "transactions": "/api/users/{user_id}/transactions",
            "budgets": "/api/users/{user_id}/budgets"
        }
    }


@app.get("/health")
async def health(db: Session = Depends(get_db)):
    """Health check endpoint."""
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as e:
        logger.warning(f"Database health check failed: {e}")
        database = "disconnected"
    return {"status": "healthy", "database": database}
