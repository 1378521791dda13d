import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from lessonhub.core.logger import logger


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs each request with its status and duration.
    """

    def __init__(self, app, slow_request_seconds=2.0):
        super().__init__(app)
        self.slow_request_seconds = slow_request_seconds

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        except Exception as e:
            elapsed_time = time.perf_counter() - start_time
            logger.structured_error(
                f"Request failed after {elapsed_time:.3f} seconds",
                error=e,
                method=request.method,
                path=request.url.path,
            )
            raise
        finally:
            elapsed_time = time.perf_counter() - start_time
            if elapsed_time > self.slow_request_seconds:
                logger.structured_warning(
                    f"Slow request took {elapsed_time:.3f} seconds",
                    method=request.method,
                    path=request.url.path,
                    status=status_code,
                )
            else:
                logger.debug(
                    f"{request.method} {request.url.path} -> {status_code} "
                    f"in {elapsed_time:.3f}s"
                )
