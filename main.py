import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent))

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api import forecast_router, health_router
from src.api.forecast.forecast_routes import GENERIC_ERROR_MESSAGE, MISSING_LOCATION_MESSAGE
from src.config.config import Config, config
from src.services.forecast_service import ForecastService
from src.utils.logging_config import setup_logging

# Configure logging
setup_logging()
logger = structlog.get_logger(__name__)


def create_app(
    forecast_service: Optional[ForecastService] = None,
    settings: Config = config,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        forecast_service: Pre-built service to use instead of one created
            from settings at startup
        settings: Application configuration

    Returns:
        Configured FastAPI application instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.

        Creates the forecast service (and its OpenAI client) on startup
        unless one was injected, and closes it again on shutdown.
        """
        logger.info("Starting Forecast Announcer application")

        owns_service = forecast_service is None
        if owns_service:
            app.state.forecast_service = ForecastService.from_config(settings)

        logger.info("Forecast Announcer application started successfully")
        try:
            yield
        finally:
            logger.info("Shutting down Forecast Announcer")
            if owns_service:
                await app.state.forecast_service.close()

    app = FastAPI(
        title="Forecast Announcer API",
        description="""
        ## Forecast Announcer API

        Five-day weather forecasts called like a sports broadcast, generated by OpenAI.

        ### Example:
        `POST /forecast` with `{"location": "Austin"}`
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    if forecast_service is not None:
        app.state.forecast_service = forecast_service

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all HTTP requests with timing information."""
        start_time = time.time()

        logger.info(
            "HTTP request started",
            method=request.method,
            url=str(request.url),
            client_ip=request.client.host if request.client else "unknown",
        )

        try:
            response = await call_next(request)
            process_time = time.time() - start_time

            logger.info(
                "HTTP request completed",
                method=request.method,
                url=str(request.url),
                status_code=response.status_code,
                process_time=process_time,
            )

            response.headers["X-Process-Time"] = str(process_time)
            return response

        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                "HTTP request failed",
                method=request.method,
                url=str(request.url),
                error=str(e),
                process_time=process_time,
            )
            raise

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions globally."""
        logger.error(
            "Unhandled exception",
            method=request.method,
            url=str(request.url),
            error=str(exc),
            exc_info=True,
        )

        return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})

    # HTTP exception handler
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render HTTP exceptions as a bare error message."""
        logger.warning(
            "HTTP exception",
            method=request.method,
            url=str(request.url),
            status_code=exc.status_code,
            detail=exc.detail,
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    # Malformed bodies carry no usable location
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            "Request validation failed",
            method=request.method,
            url=str(request.url),
            errors=exc.errors(),
        )

        return JSONResponse(status_code=400, content={"error": MISSING_LOCATION_MESSAGE})

    # Include API routes
    app.include_router(health_router)
    app.include_router(forecast_router)

    # Root endpoint (hide from swagger)
    @app.get("/", tags=["Root"], include_in_schema=False)
    async def root():
        """Root endpoint providing basic system information."""
        return {
            "message": "Forecast Announcer API",
            "version": "1.0.0",
            "status": "running",
            "timestamp": time.time(),
            "docs": "/docs",
            "redoc": "/redoc",
        }

    return app


# Create the application instance
app = create_app()


def main():
    logger.info(
        f"Starting Forecast Announcer server in {config.environment} environment",
        host=config.api_host,
        port=config.api_port,
    )

    try:
        uvicorn.run(
            app,
            host=config.api_host,
            port=config.api_port,
            log_level=config.log_level.lower(),
            access_log=True,
            server_header=False,
            date_header=False,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.error("Server failed to start", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
