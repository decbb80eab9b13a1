from __future__ import annotations

from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .logger import get_logger
from .routers import todos as todos_router
from .settings import Settings, get_settings

logger = get_logger(__name__)

ROUTE_NOT_FOUND = "Route not found"
INTERNAL_ERROR = "Something went wrong!"

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "CRUD operations for Todo items stored in a JSON file.",
    },
]


def _is_routing_miss(exc: StarletteHTTPException) -> bool:
    # The router raises 404/405 with the bare status phrase; our routes always set their own detail.
    return exc.status_code in (404, 405) and exc.detail == HTTPStatus(exc.status_code).phrase


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Every error response is rendered as {"error": <message>}:
    - route-level HTTPExceptions keep their status and detail
    - unknown paths and unsupported methods become 404 "Route not found"
    - malformed request bodies become 400 "Request validation failed"
    - anything uncaught becomes 500 "Something went wrong!" and is logged
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Todo List API",
        description="CRUD API for todo items persisted in a flat JSON file.",
        version="1.0.0",
        openapi_tags=openapi_tags,
    )

    # Browser clients only need the todo verbs and a JSON content type
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if _is_routing_miss(exc):
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": ROUTE_NOT_FOUND})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request bodies FastAPI could not parse.

        Response format:
            {
                "error": "Request validation failed",
                "detail": [... pydantic/fastapi error details ...]
            }
        """
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Request validation failed",
                "detail": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR},
        )

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating the service is up.
        """
        return {"message": "Todo List API is running!"}

    app.include_router(todos_router.router)
    return app


app = create_app()
