"""FastAPI application entrypoint."""
import os
from datetime import timedelta

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from email_validation_api.logging import configure_logging
from email_validation_api.routers import health, status, uploads
from email_validation_api.settings import Settings, get_settings
from email_validation_core.jobs import JobService, RetentionSweeper
from email_validation_core.util import generate_id
from email_validation_core.validation import BaseValidator, SimulatedEmailValidator

logger = structlog.get_logger()


def build_validator(settings: Settings) -> SimulatedEmailValidator:
    """Validator configured from settings."""
    return SimulatedEmailValidator(
        min_latency=settings.validator_min_latency_ms / 1000,
        max_latency=max(settings.validator_min_latency_ms, settings.validator_max_latency_ms) / 1000,
        failure_rate=settings.validator_failure_rate,
    )


def create_app(settings: Settings | None = None, validator: BaseValidator | None = None) -> FastAPI:
    """Instantiate the app with its job service and routers."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Email Validation Upload API", version="1.0.0")
    app.state.settings = settings
    app.state.job_service = JobService(
        validator=validator or build_validator(settings),
        concurrency=settings.validation_concurrency,
    )
    app.state.sweeper = RetentionSweeper(
        app.state.job_service.store,
        max_age=timedelta(seconds=settings.retention_max_age_seconds),
        interval=settings.retention_interval_seconds,
    )

    @app.middleware("http")
    async def request_id_mw(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or generate_id()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.error("unhandled_error", path=request.url.path, error=str(exc), exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    @app.on_event("startup")
    async def startup():
        """Start background maintenance."""
        if settings.retention_enabled:
            app.state.sweeper.start()
        logger.info("api_started", concurrency=settings.validation_concurrency)

    @app.on_event("shutdown")
    async def shutdown():
        """Stop the sweeper and let in-flight jobs finish."""
        await app.state.sweeper.stop()
        await app.state.job_service.shutdown()
        logger.info("api_stopped")

    app.include_router(health.router)
    app.include_router(uploads.router)
    app.include_router(status.router)
    return app


app = create_app()


def main():
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "3000")))


if __name__ == "__main__":
    main()
