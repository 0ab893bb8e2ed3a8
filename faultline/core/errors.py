"""Exception handler registration for the structured error contract."""

from __future__ import annotations

from collections.abc import Awaitable
from collections.abc import Callable
import json

from fastapi import FastAPI
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from faultline.core.exceptions import AccessDeniedError
from faultline.core.exceptions import ApiError
from faultline.core.exceptions import FieldValidationError
from faultline.core.exceptions import MalformedBodyError
from faultline.handling.translator import ErrorTranslator
from faultline.i18n.catalog import negotiate_locale

# Anything outside this tuple is caught by translate_unhandled_middleware.
HANDLED_EXCEPTIONS: tuple[type[Exception], ...] = (
    ApiError,
    AccessDeniedError,
    MalformedBodyError,
    json.JSONDecodeError,
    RequestValidationError,
    FieldValidationError,
    PydanticValidationError,
    IntegrityError,
    StarletteHTTPException,
)


def get_error_translator(request: Request) -> ErrorTranslator:
    """Return the translator built at startup for this application."""
    return request.app.state.error_translator


def request_locale(request: Request, translator: ErrorTranslator) -> str:
    return negotiate_locale(request.headers.get("accept-language"), translator.default_locale)


async def translate_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any fault as a single-error or validation-error response."""
    translator = get_error_translator(request)
    record = translator.translate(
        exc,
        path=request.url.path,
        locale=request_locale(request, translator),
    )
    headers = getattr(exc, "headers", None) if isinstance(exc, StarletteHTTPException) else None
    return JSONResponse(status_code=record.status, content=record.to_payload(), headers=headers)


async def translate_unhandled_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Answer unclassified faults here so the server error middleware never re-raises them."""
    try:
        return await call_next(request)
    except Exception as exc:
        return await translate_exception_handler(request, exc)


def register_error_handlers(app: FastAPI, translator: ErrorTranslator) -> None:
    """Attach the translator and its handlers to a FastAPI app instance."""

    app.state.error_translator = translator
    for exception_type in HANDLED_EXCEPTIONS:
        app.add_exception_handler(exception_type, translate_exception_handler)
    app.middleware("http")(translate_unhandled_middleware)
