import json
import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("attendance.request")


class TimingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, log_json: bool = True):
        super().__init__(app)
        self.log_json = log_json

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # the 500 body is built further out by the error handler; log the request here
            self._log(request, 500, self._elapsed_ms(start))
            raise

        latency_ms = self._elapsed_ms(start)
        response.headers["X-Latency-Ms"] = str(latency_ms)
        self._log(request, response.status_code, latency_ms)
        return response

    @staticmethod
    def _elapsed_ms(start: float) -> int:
        return int((time.perf_counter() - start) * 1000)

    def _log(self, request: Request, status: int, latency_ms: int) -> None:
        if self.log_json:
            logger.info(json.dumps({
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "latency_ms": latency_ms,
            }))
        else:
            logger.info("%s %s -> %s (%sms)", request.method, request.url.path, status, latency_ms)
