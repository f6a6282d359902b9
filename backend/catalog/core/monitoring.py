"""
Monitoring helpers: JSON log lines and operation timing.
"""

from contextlib import contextmanager
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, Iterator
import asyncio
import json
import logging
import time

logger = logging.getLogger(__name__)

# Operations slower than this are logged as warnings
SLOW_OPERATION_MS = 500

_EXTRA_FIELDS = ("operation", "duration_ms")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, timing extras included when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "where": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        entry.update({k: getattr(record, k) for k in _EXTRA_FIELDS if hasattr(record, k)})
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


@contextmanager
def timed(operation_name: str) -> Iterator[None]:
    """Log how long the block took; failures are logged and re-raised."""
    start = time.perf_counter()
    try:
        yield
    except Exception as e:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.error(f"{operation_name} failed after {elapsed_ms:.0f}ms: {e}")
        raise
    elapsed_ms = (time.perf_counter() - start) * 1000
    extra = {"operation": operation_name, "duration_ms": round(elapsed_ms, 1)}
    if elapsed_ms >= SLOW_OPERATION_MS:
        logger.warning(f"{operation_name} slow: {elapsed_ms:.0f}ms", extra=extra)
    else:
        logger.debug(f"{operation_name} took {elapsed_ms:.0f}ms", extra=extra)


def track_performance(operation_name: str):
    """Decorator form of `timed` for sync and async callables."""
    def decorator(func: Callable) -> Callable:
        if asyncio.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with timed(operation_name):
                    return await func(*args, **kwargs)
            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with timed(operation_name):
                return func(*args, **kwargs)
        return sync_wrapper

    return decorator
