"""FastAPI application entry point."""

import time
from contextlib import asynccontextmanager
from logging import getLogger

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.logging import RequestLog, get_client_ip, log_request
from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import ai_router, auth_router, events_router, health_router
from core.config import API_DEBUG, API_VERSION
from core.database import create_tables, get_connection

logger = getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup: make sure the schema exists
    conn = get_connection()
    try:
        create_tables(conn)
    finally:
        conn.close()

    yield


app = FastAPI(
    title="Calendar API",
    description="REST API for a personal calendar with natural-language smart add",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)

# CORS middleware (for development)
if API_DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Record every request in the api_requests table."""
    start_time = time.time()

    request_log = RequestLog(
        endpoint=request.url.path,
        method=request.method,
        client_ip=get_client_ip(request),
        user_id=request.query_params.get("userId"),
    )

    try:
        response = await call_next(request)
        request_log.status_code = response.status_code
        return response
    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        raise
    finally:
        error = getattr(request.state, "error_detail", None)
        if isinstance(error, dict):
            request_log.error_code = error.get("code")
            request_log.error_message = error.get("error")
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        # Don't fail the request if logging fails
        try:
            log_request(request_log)
        except Exception as e:
            logger.warning("Failed to write request log: %s", e)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Return the standard error body and remember it for the request log."""
    request.state.error_detail = exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report body/query validation failures in the standard error format."""
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        details.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))

    detail = ErrorResponse(
        error="Request validation failed",
        code=ErrorCodes.VALIDATION_ERROR,
        details=details,
    ).model_dump()
    request.state.error_detail = detail
    return JSONResponse(status_code=422, content={"detail": detail})


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "detail": ErrorResponse(
                error="Internal server error",
                code=ErrorCodes.INTERNAL_ERROR,
                details=[],
            ).model_dump()
        },
    )


# Include routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(events_router)
app.include_router(ai_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
