"""
CORS responder and response envelope builders.

Every response leaving the proxy is built here so that the CORS header set
and a single Content-Type are always present.
"""

from typing import Any, Dict, Optional, Union

from fastapi import Response
from fastapi.responses import JSONResponse, PlainTextResponse

from shared.errors import ProxyError

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, HEAD, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

JSON_MEDIA_TYPE = "application/json"


def _with_cors(extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    headers = dict(CORS_HEADERS)
    if extra:
        headers.update(extra)
    return headers


def cors_response(body: Optional[Union[str, bytes]] = None) -> Response:
    """Preflight response (204) or a bare 200 carrying ``body``."""
    if not body:
        return Response(status_code=204, headers=_with_cors())
    return Response(content=body, status_code=200, headers=_with_cors())


def json_response(payload: Any, status_code: int = 200, extra_headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    """Serialize ``payload`` as JSON with CORS headers attached."""
    return JSONResponse(content=payload, status_code=status_code, headers=_with_cors(extra_headers))


def passthrough_response(
    content: bytes,
    status_code: int,
    cache_seconds: int,
) -> Response:
    """Relay an upstream JSON body byte-for-byte with a shared-cache directive."""
    return Response(
        content=content,
        status_code=status_code,
        media_type=JSON_MEDIA_TYPE,
        headers=_with_cors({"Cache-Control": f"s-maxage={cache_seconds}"}),
    )


def error_response(exc: ProxyError) -> JSONResponse:
    """Render a ``ProxyError`` into the ``{error, status?}`` envelope."""
    return json_response(
        exc.to_response().model_dump(exclude_none=True),
        status_code=exc.status_code,
        extra_headers=exc.headers(),
    )


def not_found_response(message: str) -> PlainTextResponse:
    """Plain-text 404 for unmatched routes."""
    return PlainTextResponse(content=message, status_code=404, headers=_with_cors())
