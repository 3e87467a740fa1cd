"""One-shot initialization utilities.

``OnceCell`` runs a factory at most once per process and caches the outcome,
success or failure, for good.
"""

import logging
import threading
from dataclasses import dataclass
from types import TracebackType
from typing import Callable, Generic, Optional, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ready(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failed:
    error: BaseException
    traceback: Optional[TracebackType] = None


class OnceCell(Generic[T]):
    """Memoize-once cell with failure poisoning.

    States: ``uninitialized`` → ``ready`` or ``uninitialized`` → ``failed``.
    Both outcomes are terminal; a failed cell re-raises the very same
    exception object on every ``get()`` without running the factory again.

    Example:
        cell = OnceCell(lambda: build_aggregator_service(settings))
        service = cell.get()
    """

    def __init__(self, factory: Callable[[], T], name: str = "resource"):
        """Initialize the cell.

        Args:
            factory: Zero-argument callable producing the value
            name: Description for logging
        """
        self._factory = factory
        self._name = name
        self._lock = threading.Lock()
        self._result: Optional[Union[Ready[T], Failed]] = None

    @property
    def state(self) -> str:
        result = self._result
        if result is None:
            return "uninitialized"
        return "ready" if isinstance(result, Ready) else "failed"

    def get(self) -> T:
        """Return the value, initializing on first use."""
        result = self._result
        if result is None:
            with self._lock:
                result = self._result
                if result is None:
                    result = self._initialize()
                    self._result = result

        if isinstance(result, Ready):
            return result.value
        # Restart from the traceback captured at failure time
        raise result.error.with_traceback(result.traceback)

    def _initialize(self) -> Union[Ready[T], Failed]:
        logger.info(f"Initializing {self._name}...")
        try:
            value = self._factory()
        except Exception as e:
            logger.error(f"{self._name} initialization failed: {e}")
            return Failed(e, e.__traceback__)

        logger.info(f"{self._name} initialized successfully")
        return Ready(value)
