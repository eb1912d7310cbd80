# app/main.py

"""Inkwell Blog API - user accounts and blog posts with draft/published visibility."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.configs import settings
from app.errors import (
    BaseAppError,
    DatabaseError,
    app_exception_handler,
    database_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.routes import auth_router, post_router
from app.schemas import HealthCheckResponse
from app.utils.helpers import today_str

app = FastAPI(
    title=settings.APP_NAME,
    description="Blog posts REST API with bearer-token authentication",
    version="1.0.0",
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)


routes = [
    auth_router,
    post_router,
]

_ = [app.include_router(router) for router in routes]

errors = [
    (DatabaseError, database_exception_handler),
    (BaseAppError, app_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (StarletteHTTPException, http_exception_handler),
    (Exception, app_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_model_exclude_none=True,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "success",
                        "message": "Server is running",
                        "timestamp": "2025-01-01T00:00:00.000Z",
                        "database": "up",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
async def health_check(request: Request) -> HealthCheckResponse:
    """
    Health check endpoint.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    HealthCheckResponse
        Liveness message with the current time and, once the database handle
        exists, whether it answers.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"status": "success", "message": "Server is running", "timestamp": "...", "database": "up"}
    """
    database = getattr(request.app.state, "database", None)
    db_status = None
    if database is not None:
        db_status = "up" if await database.ping() else "down"

    return HealthCheckResponse(timestamp=today_str(), database=db_status)
