"""
Pure functions for sync wrapper operations.

Functions for event loop detection, thread management, and async-to-sync
conversion without I/O dependencies.
"""

import asyncio
import concurrent.futures
from typing import Any, Dict


def detect_event_loop_state() -> str:
    """Detect current event loop state.

    Returns:
        - "none": No running event loop in current thread
        - "running": An event loop is running in this thread
    """
    try:
        asyncio.get_running_loop()
        return "running"
    except RuntimeError:
        return "none"


def create_thread_local_loop() -> asyncio.AbstractEventLoop:
    """Create a new event loop for thread-local use."""
    return asyncio.new_event_loop()


def run_in_thread_pool(coro: Any, timeout: int = 60) -> Any:
    """Run coroutine in thread pool executor."""
    with concurrent.futures.ThreadPoolExecutor() as executor:
        future = executor.submit(lambda: asyncio.run(coro))
        return future.result(timeout=timeout)


def filter_generation_kwargs(**kwargs) -> Dict[str, Any]:
    """Drop unknown or unset keyword arguments for sync generation calls."""
    allowed_keys = {"filename", "service", "api_key"}
    return {
        key: value
        for key, value in kwargs.items()
        if key in allowed_keys and value is not None
    }
