"""
Cross-origin headers for the API routes.

Origins outside the allow-list are not rejected: they get the first
allowed origin back in Access-Control-Allow-Origin, which browsers will
then refuse. A "*" entry in the list allows every origin.
"""
import logging
from typing import Dict, Sequence

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from holiday_api.errors import UNHANDLED_ERROR_MESSAGE

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
ALLOWED_HEADERS = "Content-Type, Authorization"
PREFLIGHT_MAX_AGE = 60 * 60 * 24  # 24h


def resolve_allowed_origin(origin: str, allowed_origins: Sequence[str]) -> str:
    if origin in allowed_origins or "*" in allowed_origins:
        return origin
    return allowed_origins[0] if allowed_origins else ""


def cors_headers(origin: str, allowed_origins: Sequence[str]) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": resolve_allowed_origin(origin, allowed_origins),
        "Access-Control-Allow-Methods": ", ".join(ALLOWED_METHODS),
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }


class EdgeCORS:
    """HTTP middleware applying cors_headers to every path under ``path_prefix``."""

    def __init__(self, allowed_origins: Sequence[str], path_prefix: str = "/api"):
        self.allowed_origins = list(allowed_origins)
        self.path_prefix = path_prefix.rstrip("/")

    def applies_to(self, path: str) -> bool:
        return path == self.path_prefix or path.startswith(self.path_prefix + "/")

    async def __call__(self, request: Request, call_next):
        if not self.applies_to(request.url.path):
            return await call_next(request)

        headers = cors_headers(request.headers.get("origin", ""), self.allowed_origins)

        if request.method == "OPTIONS":
            headers["Access-Control-Max-Age"] = str(PREFLIGHT_MAX_AGE)
            return Response(status_code=204, headers=headers)

        try:
            response = await call_next(request)
        except Exception:
            # errors the app's handlers did not turn into a response still need the headers
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            response = JSONResponse(status_code=500, content={"error": UNHANDLED_ERROR_MESSAGE})
        response.headers.update(headers)
        return response
