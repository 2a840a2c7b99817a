"""
Request correlation for parcel logs.

Every request gets a correlation ID (taken from ``X-Correlation-ID`` or
generated). It is kept in a context variable for the lifetime of the
request, so store and service records logged while serving it carry the
same ID as the request line.
"""

import time
import uuid
import logging
from contextvars import ContextVar
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("parcel_tracker.http")

NO_CORRELATION_ID = "-"

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default=NO_CORRELATION_ID)


class CorrelationIdFilter(logging.Filter):
    """Stamp ``record.correlation_id`` with the ID of the request being served."""
    
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = correlation_id_var.get()
        return True


class ObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        token = correlation_id_var.set(correlation_id)
        
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            correlation_id_var.reset(token)
        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        
        response.headers["X-Correlation-ID"] = correlation_id
        response.headers["X-Process-Time"] = str(duration_ms)
        
        log_data = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        }
        
        if response.status_code >= 500:
            logger.error("Parcel request failed", extra=log_data)
        elif response.status_code >= 400:
            logger.warning("Parcel request rejected", extra=log_data)
        else:
            logger.info("Parcel request served", extra=log_data)
            
        return response
