"""JSON body middleware — reject unparseable bodies on every route.

Learn: FastAPI only decodes a body when the endpoint declares one, so a
broken body sent to GET /list would be silently ignored. This middleware
runs before routing and authentication:
- empty body → passed through
- JSON content type (application/json, application/*+json) → must parse
- any other or missing content type with a body → rejected
Rejections are 444 with the usual {"success": false, ...} envelope.
The body is read once; Starlette replays it to the endpoint.
"""

import json
from typing import Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from todolist.api.errors import json_parse_error

logger = structlog.get_logger()


def _is_json_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or (
        media_type.startswith("application/") and media_type.endswith("+json")
    )


def body_parse_error(content_type: Optional[str], body: bytes) -> Optional[str]:
    """Describe why body cannot be accepted as JSON, or None if it can."""
    if not body.strip():
        return None
    if not content_type:
        return "Missing Content-Type, expected application/json"
    if not _is_json_type(content_type):
        return f"Unsupported Content-Type {content_type}, expected application/json"
    try:
        json.loads(body)
    except ValueError as e:
        return str(e)
    return None


class JSONBodyMiddleware(BaseHTTPMiddleware):
    """Answer 444 for request bodies that are not valid JSON."""

    async def dispatch(self, request: Request, call_next) -> Response:
        body = await request.body()
        error = body_parse_error(request.headers.get("content-type"), body)
        if error:
            logger.info("http.json_parse_error", path=request.url.path, error=error)
            return json_parse_error(error)
        return await call_next(request)
