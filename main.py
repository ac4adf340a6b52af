"""FastAPI application entrypoint for the Petshop API.

In-memory registry of petshops and their pets. Run with::

    uvicorn main:app --port 3000
"""
from typing import Optional
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import router
from app.core.config import Settings, settings
from app.core.errors import PetshopAPIError
from app.core.logging import get_logger, setup_logging
from app.infrastructure.store import PetshopStore

# Initialize structured logging
log_format = settings.environment == "production"
setup_logging(level=settings.log_level, json_format=log_format)
logger = get_logger(__name__)

# Application metadata
APP_VERSION = "1.0.0"
APP_NAME = "Petshop API"


def create_app(
    store: Optional[PetshopStore] = None,
    app_settings: Optional[Settings] = None
) -> FastAPI:
    """Build the application around its own petshop store.

    Args:
        store: Store to serve (a fresh empty one if None)
        app_settings: Settings to use (module settings if None)

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title=APP_NAME,
        description="Cadastro em memória de petshops e seus pets",
        version=APP_VERSION,
        debug=app_settings.debug,
        docs_url="/docs" if app_settings.environment != "production" else None,
        redoc_url="/redoc" if app_settings.environment != "production" else None,
    )
    app.state.store = store if store is not None else PetshopStore()
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every request with timing and status code.

        Unexpected failures are answered with a 500 instead of leaving the
        client without a response.
        """
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()

        logger.info(
            f"Request started: {request.method} {request.url.path}",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
            }
        )

        try:
            response = await call_next(request)
            duration_ms = (time.time() - start_time) * 1000

            logger.info(
                f"Request completed: {request.method} {request.url.path}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round(duration_ms, 2),
                }
            )

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"Request failed: {request.method} {request.url.path}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "duration_ms": round(duration_ms, 2),
                    "error": str(e),
                },
                exc_info=True
            )
            return JSONResponse(
                status_code=500,
                content={"error": "Erro interno do servidor.", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )

    @app.exception_handler(PetshopAPIError)
    async def petshop_error_handler(request: Request, exc: PetshopAPIError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())),
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        logger.warning(
            f"Invalid request body: {request.method} {request.url.path}",
            extra={"method": request.method, "path": request.url.path}
        )
        return JSONResponse(
            status_code=400,
            content={"error": "Dados da requisição inválidos.", "details": details}
        )

    @app.on_event("startup")
    async def startup_event():
        logger.info("Application starting up", extra={"operation": "startup"})

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Application shutting down", extra={"operation": "shutdown"})

    app.include_router(router, prefix=app_settings.api_prefix)

    @app.get("/")
    def root():
        """Root endpoint with basic service info."""
        return {
            "service": APP_NAME,
            "version": APP_VERSION,
            "status": "running",
            "environment": app_settings.environment
        }

    @app.get("/health")
    def health_check(request: Request):
        """Liveness probe."""
        return {
            "status": "healthy",
            "version": APP_VERSION,
            "checks": {
                "api": "ok",
                "petshops": len(request.app.state.store),
            }
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
