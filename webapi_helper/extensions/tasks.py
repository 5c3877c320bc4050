from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Set

_logger = logging.getLogger(__name__)

# The event loop only keeps weak references to tasks; hold them until done.
_background_tasks: Set[asyncio.Task] = set()


def _on_done(
    task: asyncio.Task,
    logger: logging.Logger,
    on_error: Optional[Callable[[BaseException], Any]],
) -> None:
    _background_tasks.discard(task)
    if task.cancelled():
        logger.debug("Background task %s was cancelled", task.get_name())
        return
    exc = task.exception()
    if exc is None:
        return
    if on_error is not None:
        try:
            on_error(exc)
        except Exception:
            logger.exception("Error callback failed for background task %s", task.get_name())
        return
    logger.error(
        "Background task %s failed", task.get_name(), exc_info=(type(exc), exc, exc.__traceback__)
    )


# PUBLIC_INTERFACE
def fire_and_forget(
    awaitable: Awaitable[Any],
    logger: Optional[logging.Logger] = None,
    on_error: Optional[Callable[[BaseException], Any]] = None,
    name: Optional[str] = None,
) -> asyncio.Task:
    """
    Schedule awaitable on the running loop without awaiting it.

    Any exception it raises is logged (or passed to on_error) instead of being
    left unobserved. Must be called from within a running event loop.

    Returns:
        The scheduled task, for callers that want to cancel or await it later.
    """
    task = asyncio.ensure_future(awaitable)
    if name:
        task.set_name(name)
    _background_tasks.add(task)
    task.add_done_callback(lambda t: _on_done(t, logger or _logger, on_error))
    return task


# PUBLIC_INTERFACE
def safe_fire_and_forget(
    func: Callable[..., Awaitable[Any]],
    *args: Any,
    logger: Optional[logging.Logger] = None,
    on_error: Optional[Callable[[BaseException], Any]] = None,
    **kwargs: Any,
) -> asyncio.Task:
    """Call an async function with arguments and hand the result to fire_and_forget."""
    return fire_and_forget(
        func(*args, **kwargs), logger=logger, on_error=on_error, name=getattr(func, "__name__", None)
    )


def pending_count() -> int:
    return len(_background_tasks)
