# backend/agriswarm/main.py

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from agriswarm.api import router as api_router
from agriswarm.core.config import Settings, settings
from agriswarm.core.database import init_db
from agriswarm.core.error_middleware import ExceptionLoggingMiddleware
from agriswarm.core.exceptions import (
    AgriSwarmError,
    ComputationError,
    DependencyError,
    InputValidationError,
    error_body,
)
from agriswarm.core.logger import configure_logging, logger
from agriswarm.core.request_middleware import RequestLoggingMiddleware
from agriswarm.di import build_container

ERROR_STATUS = {
    InputValidationError: 422,
    ComputationError: 500,
    DependencyError: 503,
}

HTTP_ERROR_CODES = {
    404: "not_found",
    405: "method_not_allowed",
}


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    app_settings = app_settings or settings
    configure_logging(app_settings.LOG_DIR, app_settings.LOG_LEVEL)

    app = FastAPI(title=app_settings.APP_NAME, version=app_settings.APP_VERSION)

    # ---------------------------------------------------
    # CORS
    # ---------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------------------------------------------------
    # Logging middlewares
    # ---------------------------------------------------
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ExceptionLoggingMiddleware)

    app.state.container = build_container(app_settings)

    # ---------------------------------------------------
    # Structured errors: {error, detail, timestamp}
    # ---------------------------------------------------
    @app.exception_handler(AgriSwarmError)
    async def agriswarm_error_handler(request: Request, exc: AgriSwarmError):
        status = ERROR_STATUS.get(type(exc), 500)
        logger.warning(
            f"{exc.code}: {exc.message}",
            extra={"method": request.method, "path": request.url.path, "status_code": status},
        )
        return JSONResponse(
            status_code=status,
            content=error_body(exc.code, {"message": exc.message, "errors": exc.details}),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        logger.warning(
            "validation_error: malformed request",
            extra={"method": request.method, "path": request.url.path, "status_code": 422},
        )
        return JSONResponse(
            status_code=422,
            content=error_body("validation_error", {"message": "malformed request", "errors": errors}),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(HTTP_ERROR_CODES.get(exc.status_code, "http_error"), exc.detail),
            headers=getattr(exc, "headers", None),
        )

    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    def startup_event():
        init_db(app.state.container.engine)
        logger.info("AgriSwarm backend started with structured JSON logging")

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


app = create_app()
