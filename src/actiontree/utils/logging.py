from __future__ import annotations
import logging
import time
from functools import wraps
from typing import Any, Callable, Mapping

from rich.console import Console
from rich.logging import RichHandler


def _summarize(value: Any) -> str:
    if isinstance(value, Mapping):
        return f"{type(value).__name__} with {len(value)} key(s)"
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__} of {len(value)} item(s)"
    return repr(value)


def log_calls(logger_name: str | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Trace calls at DEBUG with their duration; failures are logged at WARNING and re-raised.

    Returned documents are summarised by size rather than dumped, since a
    loaded tree can be large.
    """

    def _decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        logger = logging.getLogger(logger_name or func.__module__)

        @wraps(func)
        def _wrapper(*args: Any, **kwargs: Any) -> Any:
            call = ", ".join([repr(a) for a in args] + [f"{k}={v!r}" for k, v in kwargs.items()])
            logger.debug("%s(%s)", func.__name__, call)
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                logger.warning("%s(%s) failed: %s: %s", func.__name__, call, type(exc).__name__, exc)
                raise
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.debug("%s returned %s in %.1f ms", func.__name__, _summarize(result), elapsed_ms)
            return result

        return _wrapper

    return _decorator


def configure_logging(level: str = "WARNING", console: Console | None = None) -> None:
    """Route the package's log records through a rich handler on stderr."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger("actiontree")
    root.handlers = [handler]
    root.setLevel(level.upper())
