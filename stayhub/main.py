import asyncio
import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stayhub.api.dependencies import get_bundle, get_use_cases
from stayhub.api.routers.health import router as health_router
from stayhub.api.routers.reservations import router as reservations_router
from stayhub.api.routers.worker import router as worker_router
from stayhub.config import get_settings
from stayhub.domain.errors import (
    AccommodationUnavailable,
    AuthorizationError,
    BookingTimeout,
    CapacityExceeded,
    Conflict,
    DateConflict,
    DomainError,
    IllegalTransition,
    InvalidRange,
    NotFound,
    ValidationError,
)
from stayhub.infrastructure.db.tables import metadata
from stayhub.infrastructure.messaging.reminder_worker import ReminderWorker

settings = get_settings()

# Configure structured logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InvalidRange: 400,
    ValidationError: 400,
    AuthorizationError: 403,
    NotFound: 404,
    DateConflict: 409,
    IllegalTransition: 409,
    AccommodationUnavailable: 409,
    Conflict: 409,
    CapacityExceeded: 422,
    BookingTimeout: 503,
}


def status_for(exc: DomainError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in ERROR_STATUS:
            return ERROR_STATUS[error_type]
    return 400


@asynccontextmanager
async def lifespan(app: FastAPI):
    bundle = get_bundle(settings)
    engine = bundle["engine"]
    if engine is not None:
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all)

    worker = None
    worker_task = None
    if settings.reminders_enabled:
        worker = ReminderWorker(
            use_case=get_use_cases(settings, bundle)["reminders"],
            clock=bundle["clock"],
            run_at_hour=settings.reminder_hour_utc,
        )
        worker_task = asyncio.create_task(worker.start())

    yield

    # Cleanup
    if worker is not None:
        await worker.stop()
        worker_task.cancel()
    await bundle["dispatcher"].drain()
    if engine is not None:
        await engine.dispose()

app = FastAPI(
    title="StayHub Booking API",
    version="0.1.0",
    lifespan=lifespan
)


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    status_code = status_for(exc)
    logger.info(
        "Request rejected by domain rule",
        extra={"code": exc.code, "status_code": status_code, "path": request.url.path},
    )
    headers = {"Retry-After": "1"} if isinstance(exc, BookingTimeout) else None
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
        headers=headers,
    )


# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler to prevent stack trace exposure to clients.
    All unhandled exceptions are logged internally and return a generic error message.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "message": "An unexpected error occurred. Please contact support with the error_id if the issue persists."
        }
    )


app.include_router(health_router, tags=["Health"])
app.include_router(reservations_router, prefix="/api/v1", tags=["Reservations"])
app.include_router(worker_router, prefix="/api/v1", tags=["Worker"])
