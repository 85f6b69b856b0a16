"""Logging helpers for pdf-converter.

Messages carry structured context as a trailing ``[key=value, ...]`` block,
and every record emitted while a request is being served is tagged with
that request's id.
"""

import logging
import sys
import time
import uuid
from contextvars import ContextVar
from typing import Any, Iterable, MutableMapping, Optional

# Request id of the conversion currently being handled (one per task)
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ContextLogger(logging.LoggerAdapter):
    """Adapter accepting an ``extra_data`` mapping on every logging call.

    Examples:
        >>> logger = get_logger(__name__)
        >>> logger.info("Document converted", extra_data={"format": "md"})
    """

    def __init__(self, logger: logging.Logger):
        super().__init__(logger, {})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]):
        context = dict(kwargs.pop("extra_data", None) or {})
        request_id = request_id_var.get()
        if request_id:
            context["request_id"] = request_id

        if context:
            msg = f"{msg} [" + ", ".join(f"{k}={v}" for k, v in context.items()) + "]"
        return msg, kwargs


def setup_logging(log_level: str = "INFO", quiet: Iterable[str] = ("uvicorn.access",)):
    """Send all service logs to stdout as plain text.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        quiet: Logger names raised to WARNING regardless of ``log_level``
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logging.basicConfig(level=level, handlers=[console], force=True)

    for name in quiet:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger (typically ``get_logger(__name__)``)."""
    return ContextLogger(logging.getLogger(name))


def set_request_id(request_id: Optional[str] = None) -> str:
    """Bind ``request_id`` (or a fresh hex uuid) to the current context."""
    request_id = request_id or uuid.uuid4().hex
    request_id_var.set(request_id)
    return request_id


class Timer:
    """Measures a pipeline stage in whole milliseconds.

    ``elapsed_ms`` is live inside the ``with`` block and frozen on exit.
    """

    def __init__(self):
        self._started = time.perf_counter()
        self._stopped: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._started = time.perf_counter()
        return self

    def __exit__(self, *exc_info):
        self._stopped = time.perf_counter()

    @property
    def elapsed_ms(self) -> int:
        end = self._stopped if self._stopped is not None else time.perf_counter()
        return int((end - self._started) * 1000)
