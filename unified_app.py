"""
Engagement Confirmation Summary - application entry point

Architecture:
- /                      → Summary form (HTML)
- /api/summary/*         → Form state, generation, PDF / Word export
- /health                → Liveness check
"""
import logging
import os

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from engagement.config import LOG_LEVEL

# Configure logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)

from portal.portal_app import app  # noqa: E402

logger.info("✅ Loaded summary portal app")


# ==================== SECURITY HEADERS MIDDLEWARE ====================

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if request.url.scheme == "https" or request.headers.get("x-forwarded-proto") == "https":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


app.add_middleware(SecurityHeadersMiddleware)


def main():
    import uvicorn

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting summary portal on port {port}")
    uvicorn.run(app, host=os.getenv("HOST", "127.0.0.1"), port=port)


if __name__ == "__main__":
    main()
