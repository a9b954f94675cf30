"""Utilities for calling the asyncio accessor from synchronous code."""

import asyncio
import threading
from typing import Any, Coroutine, Optional
from concurrent.futures import Future
import logging

logger = logging.getLogger(__name__)


class AsyncBridge:
    """Runs an asyncio event loop in a background thread.

    Synchronous callers hand coroutines to the bridge and get back a
    concurrent Future they can block on.
    """

    def __init__(self, name: str = "AsyncBridge"):
        self._name = name
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._running = False

    @property
    def is_running(self) -> bool:
        """Check if the bridge loop is running."""
        return self._running and self._loop is not None

    @property
    def loop(self) -> Optional[asyncio.AbstractEventLoop]:
        """Get the event loop, or None if the bridge is not running."""
        return self._loop if self._running else None

    def start(self) -> None:
        """Start the event loop in a background thread."""
        if self._running:
            return

        self._loop = asyncio.new_event_loop()
        self._running = True
        self._thread = threading.Thread(target=self._run_loop, daemon=True, name=self._name)
        self._thread.start()
        logger.debug(f"{self._name} started")

    def _run_loop(self) -> None:
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_forever()
        finally:
            self._loop.close()
            logger.debug(f"{self._name} event loop closed")

    def run_async(self, coro: Coroutine[Any, Any, Any]) -> Future:
        """Schedule a coroutine on the bridge loop.

        Args:
            coro: The coroutine to run

        Returns:
            A Future resolving to the coroutine result

        Raises:
            RuntimeError: If the bridge is not running
        """
        if not self._loop or not self._running:
            coro.close()
            raise RuntimeError(f"{self._name} is not running")

        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    def run(self, coro: Coroutine[Any, Any, Any], timeout: Optional[float] = None) -> Any:
        """Run a coroutine on the bridge loop and wait for its result.

        Args:
            coro: The coroutine to run
            timeout: Seconds to wait, or None to wait indefinitely

        Raises:
            TimeoutError: If the result is not ready in time; the coroutine
                is cancelled
        """
        future = self.run_async(coro)
        try:
            return future.result(timeout)
        except TimeoutError:
            future.cancel()
            raise

    def stop(self) -> None:
        """Stop the event loop and wait for its thread to finish."""
        if not self._running:
            return

        self._running = False

        if self._loop:
            self._loop.call_soon_threadsafe(self._loop.stop)

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5)

        logger.debug(f"{self._name} stopped")

    def __enter__(self) -> "AsyncBridge":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
