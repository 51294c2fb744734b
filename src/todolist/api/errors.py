"""Exception handlers — every failure leaves as the same JSON envelope.

Learn: Routes raise HTTPException with the status code; these handlers
only shape the body:
- HTTPException → {"success": false, "message": detail}
- schema violations → 400 {"success": false, "message": "Invalid input", "errors": [...]}
- store failures (SQLAlchemyError) → 400 {"success": false, "message": "Error", "error": ...}

Malformed JSON bodies never reach a route: JSONBodyMiddleware answers
them with json_parse_error() (444) before routing and authentication.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger()

JSON_PARSE_ERROR = 444


def _envelope(status_code: int, message: str, headers=None, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, **extra},
        headers=headers,
    )


def json_parse_error(detail: str) -> JSONResponse:
    return _envelope(JSON_PARSE_ERROR, "JSON parse error", error=detail)


def _field_errors(exc: RequestValidationError) -> list[dict]:
    errors = []
    for err in exc.errors():
        loc = list(err.get("loc", ()))
        # FastAPI prefixes body errors with "body"; a field may also be named body
        if loc[:1] == ["body"]:
            loc = loc[1:]
        errors.append({
            "field": ".".join(str(part) for part in loc),
            "message": err.get("msg", "Invalid value"),
            "type": err.get("type"),
        })
    return errors


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _envelope(
        exc.status_code,
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return _envelope(400, "Invalid input", errors=_field_errors(exc))


async def store_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.warning("store.error", path=request.url.path, error=str(exc))
    return _envelope(400, "Error", error=exc.__class__.__name__)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_exception_handler)
