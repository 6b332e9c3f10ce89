"""
API Envelope Utilities

Every response leaves the service in one of two shapes:

    {"statusCode": 200, "data": ..., "message": "...", "success": true}
    {"statusCode": 404, "message": "...", "success": false, "errors": [...]}

Handlers raise ApiError (or one of its subclasses) and return api_response(...);
the exception handlers registered by register_exception_handlers() turn
everything else into the error envelope.
"""

import logging
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from schemas.return_schemas import ApiResponse, ApiErrorResponse

logger = logging.getLogger(__name__)


class ApiError(HTTPException):
    """HTTPException carrying an error list for the envelope"""

    def __init__(self, status_code: int, message: str = "Something went wrong", errors: Optional[List[Any]] = None):
        super().__init__(status_code=status_code, detail=message)
        self.message = message
        self.errors = errors or []


class ValidationError(ApiError):
    """Bad or missing input"""

    def __init__(self, message: str = "Invalid request", errors: Optional[List[Any]] = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, message, errors)


class NotFoundError(ApiError):
    """No matching record"""

    def __init__(self, message: str = "Resource not found", errors: Optional[List[Any]] = None):
        super().__init__(status.HTTP_404_NOT_FOUND, message, errors)


def api_response(status_code: int, data: Any = None, message: str = "Success") -> JSONResponse:
    envelope = ApiResponse(
        status_code=status_code,
        data=jsonable_encoder(data, by_alias=True),
        message=message,
        success=status_code < 400
    )
    return JSONResponse(status_code=status_code, content=envelope.model_dump(by_alias=True))


def error_response(status_code: int, message: str, errors: Optional[List[Any]] = None, headers=None) -> JSONResponse:
    envelope = ApiErrorResponse(
        status_code=status_code,
        message=message,
        errors=jsonable_encoder(errors or [])
    )
    return JSONResponse(status_code=status_code, content=envelope.model_dump(by_alias=True), headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    errors = exc.errors if isinstance(exc, ApiError) else []
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, message, errors, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(error.get("loc", [])), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", errors)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
