"""
Security headers for portal responses.

Every `/api` response carries user or session data, so none of it may be
cached, and none of it is a page that should load scripts or be framed.
The interactive docs keep the browser defaults so they can still render.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


BASE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}

API_HEADERS = {
    "Cache-Control": "no-store",
    "Pragma": "no-cache",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
}

API_PREFIX = "/api"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        headers = dict(BASE_HEADERS)
        if request.url.path.startswith(API_PREFIX):
            headers.update(API_HEADERS)
        for header, value in headers.items():
            response.headers[header] = value
        return response
