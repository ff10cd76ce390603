"""FastAPI application factory and error mapping."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.domain.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    StockError,
    ValidationError,
)
from storefront.infrastructure.api import (
    branch_routes,
    order_routes,
    product_routes,
    user_routes,
)
from storefront.infrastructure.bootstrap import Container

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[DomainException], int] = {
    ValidationError: 400,
    StockError: 400,
    EntityNotFoundError: 404,
    ConflictError: 409,
}


def status_for(exc: DomainException) -> int:
    for error_type, status in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status
    return 500


def create_app(container: Container) -> FastAPI:
    app = FastAPI(title="Storefront API")
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DomainException)
    async def domain_error(request: Request, exc: DomainException) -> JSONResponse:
        status = status_for(exc)
        if status == 500:
            logger.error("Unmapped domain error on %s: %s", request.url.path, exc)
            return JSONResponse(status_code=500, content={"message": "Server error!"})
        return JSONResponse(status_code=status, content={"message": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        if location:
            message = f"{location}: {message}"
        return JSONResponse(status_code=400, content={"message": message})

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Server error!"})

    @app.get("/")
    def read_root():
        return {"message": "Storefront API running"}

    app.include_router(product_routes.router, prefix="/api")
    app.include_router(order_routes.router, prefix="/api")
    app.include_router(user_routes.router, prefix="/api")
    app.include_router(branch_routes.router, prefix="/api")
    return app
