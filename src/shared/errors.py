"""HTTP mapping for domain errors.

Protean's own handlers cover the generic framework exceptions. The handlers
registered here refine them for the cart, checkout and identity errors, and
give every error response the same ``{"error", "message", "errors"}`` body.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from identity.errors import InvalidCredentials, NotAuthenticated, UserAlreadyExists
from ordering.cart.errors import (
    CartVersionConflict,
    DataIntegrityError,
    EntryNotFound,
    InvalidQuantity,
    ProductNotFound,
)

logger = structlog.get_logger(__name__)


def _first_message(messages) -> str:
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, (list, tuple)) and value:
                return str(value[0])
            if value:
                return str(value)
    return "Request could not be processed"


def _error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    content = {"error": message, "message": message}
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return _error_response(400, _first_message(exc.messages), exc.messages)


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())[1:]) or "body"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return _error_response(400, _first_message(errors), errors)


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    messages = getattr(exc, "messages", None)
    return _error_response(404, _first_message(messages), messages if isinstance(messages, dict) else None)


async def _not_authenticated(request: Request, exc: NotAuthenticated) -> JSONResponse:
    return _error_response(401, exc.reason)


async def _data_integrity(request: Request, exc: DataIntegrityError) -> JSONResponse:
    logger.error(
        "Cart references a product missing from the catalog",
        path=request.url.path,
        entry_id=str(exc.entry_id),
        product_id=str(exc.product_id),
    )
    return _error_response(
        409,
        "Cart contains an item whose product no longer exists",
        {"cartItemId": [str(exc.entry_id)], "productId": [str(exc.product_id)]},
    )


async def _version_conflict(request: Request, exc: Exception) -> JSONResponse:
    logger.warning("Cart write gave up after repeated conflicts", path=request.url.path)
    return _error_response(409, "Cart was modified concurrently, please retry")


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(InvalidQuantity, _validation_error)
    app.add_exception_handler(UserAlreadyExists, _validation_error)
    app.add_exception_handler(InvalidCredentials, _validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(ProductNotFound, _not_found)
    app.add_exception_handler(EntryNotFound, _not_found)
    app.add_exception_handler(NotAuthenticated, _not_authenticated)
    app.add_exception_handler(DataIntegrityError, _data_integrity)
    app.add_exception_handler(CartVersionConflict, _version_conflict)
    app.add_exception_handler(ExpectedVersionError, _version_conflict)
