"""Access log: one structured line per request."""
from fastapi import FastAPI, Request
import time

from getitdone.utils.logger import StructuredLogger, get_logger

access_logger = get_logger("getitdone.access")


def _duration_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def log_method(logger: StructuredLogger, status_code: int):
    """Server errors log as ERROR, client errors as WARNING, the rest as INFO."""
    if status_code >= 500:
        return logger.error
    if status_code >= 400:
        return logger.warning
    return logger.info


def add_request_logging(app: FastAPI) -> None:
    """Log method, path, status and duration of every request."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # Unhandled; the error handler turns it into a 500 further out
            access_logger.error(
                "request",
                method=request.method,
                path=request.url.path,
                status=500,
                duration_ms=_duration_ms(started),
            )
            raise

        log_method(access_logger, response.status_code)(
            "request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=_duration_ms(started),
        )
        return response
