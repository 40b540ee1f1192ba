"""
Sync API wrappers for async generator methods.
"""

import asyncio
import threading
from functools import wraps
from typing import Any, Callable, Optional, TypeVar, cast

from .core.sync import (
    detect_event_loop_state,
    create_thread_local_loop,
    filter_generation_kwargs,
    run_in_thread_pool,
)

F = TypeVar("F", bound=Callable[..., Any])

_thread_local = threading.local()


def get_or_create_event_loop() -> asyncio.AbstractEventLoop:
    """Get a reusable event loop for the current thread."""
    loop = getattr(_thread_local, "loop", None)
    if loop is None or loop.is_closed():
        loop = create_thread_local_loop()
        _thread_local.loop = loop
    return cast(asyncio.AbstractEventLoop, loop)


def sync_wrapper(async_func: F) -> F:
    """
    Decorator to create sync version of async method.

    Inside a running loop the coroutine is executed on a worker thread;
    otherwise it runs on a thread-local loop.
    """

    @wraps(async_func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if detect_event_loop_state() == "running":
            return run_in_thread_pool(async_func(*args, **kwargs))
        loop = get_or_create_event_loop()
        return loop.run_until_complete(async_func(*args, **kwargs))

    return cast(F, wrapper)


class SyncGeneratorMixin:
    """Mixin providing sync versions of async generation methods."""

    def generate_text_sync(self, text: str, filename: Optional[str] = None) -> Any:
        """Synchronous version of generate_text."""
        return sync_wrapper(getattr(self, "generate_text"))(text, filename)

    def generate_url_sync(self, url: str, **options: Any) -> Any:
        """Synchronous version of generate_url."""
        return sync_wrapper(getattr(self, "generate_url"))(
            url, **filter_generation_kwargs(**options)
        )
