"""
FastAPI application factory for the employee API.

Error mapping:
- ValidationError, InvalidPayloadError -> 400 {"result": message}
- NotFoundError -> 404 {"result": message}
- unmatched routes and methods -> 404 plain text "Not found"
- anything else -> 500 {"result": "Internal server error."}

Each request runs under a bound log context carrying its request id, which
is echoed back in the X-Request-ID header.
"""

import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.config import AppConfig
from src.api.routes import router
from src.core.validators import ValidationError
from src.employees import (
    EmployeeService,
    EmployeeStore,
    ExternalContentClient,
    InvalidPayloadError,
    NotFoundError,
)
from src.observability.logger import bind_request_context, get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def build_service(config: AppConfig) -> EmployeeService:
    """Wire a fresh store, content client and service from ``config``."""
    content_client = ExternalContentClient(
        quote_url=config.quote_api_url,
        joke_url=config.joke_api_url,
        timeout=config.external_api_timeout,
    )
    return EmployeeService(EmployeeStore(), content_client, rules_path=config.rules_path)


def create_app(config: AppConfig | None = None, service: EmployeeService | None = None) -> FastAPI:
    """
    Create the API application.

    Args:
        config: Runtime configuration (read from the environment by default)
        service: Pre-built service, e.g. with stubbed collaborators in tests
    """
    config = config or AppConfig.from_env()
    app = FastAPI(title="Employee API")
    app.state.config = config
    app.state.service = service or build_service(config)
    app.include_router(router)

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        with bind_request_context(request_id=request_id, method=request.method, path=request.url.path):
            response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"result": exc.message})

    @app.exception_handler(InvalidPayloadError)
    async def invalid_payload_handler(request: Request, exc: InvalidPayloadError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"result": exc.message})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"result": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return PlainTextResponse("Not found", status_code=404)
        return JSONResponse(status_code=exc.status_code, content={"result": str(exc.detail)})

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error",
            extra={"path": request.url.path, "method": request.method, "error_type": type(exc).__name__},
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"result": "Internal server error."})

    return app
