
import logging

from starlette.middleware.base import BaseHTTPMiddleware

from regs_insight.errors import error_response

logger = logging.getLogger(__name__)


class CatchAllExceptionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "%s on %s %s (500): %s",
                type(exc).__name__, request.method, request.url.path, exc,
                exc_info=True,
            )
            return error_response(500, "internal")
