"""
Circuit Breaker pattern implementation for resilience.
Stops calling a failing video metadata source until it has had time to recover.
"""
import time
from enum import Enum
from threading import Lock
from typing import Awaitable, Callable, Dict, List, TypeVar, Optional
import logging

from app.core.exceptions import CircuitBreakerOpenError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CircuitState(Enum):
    """Circuit breaker states."""
    CLOSED = "closed"      # Normal operation
    OPEN = "open"          # Blocking calls
    HALF_OPEN = "half_open"  # Testing recovery


class CircuitBreaker:
    """
    Thread-safe circuit breaker implementation.

    Usage:
        breaker = CircuitBreaker("channel_videos:UC_x", failure_threshold=5)
        videos = await breaker.call_async(lambda: fetcher.get_channel_videos("UC_x"))
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        recovery_timeout_sec: float = 30,
    ) -> None:
        self._name = name
        self._failure_threshold = failure_threshold
        self._recovery_timeout_sec = recovery_timeout_sec

        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._last_failure_time: Optional[float] = None
        self._lock = Lock()

    @property
    def state(self) -> CircuitState:
        """Current circuit state."""
        return self._state

    @property
    def name(self) -> str:
        """Circuit breaker name."""
        return self._name

    async def call_async(
        self,
        func: Callable[[], Awaitable[T]],
        fallback: Optional[Callable[[], T]] = None,
    ) -> T:
        """
        Await a coroutine function through the circuit breaker.

        Args:
            func: Zero-argument callable returning an awaitable
            fallback: Optional fallback if circuit is open or the call fails

        Returns:
            Result from func or fallback

        Raises:
            CircuitBreakerOpenError: If open and no fallback provided
        """
        if not self._allow_request():
            if fallback:
                logger.warning(f"Circuit breaker '{self._name}' OPEN, using fallback")
                return fallback()
            raise CircuitBreakerOpenError(self._name)

        try:
            result = await func()
            self._on_success()
            return result
        except Exception as e:
            self._on_failure()
            if fallback:
                logger.warning(f"Circuit breaker '{self._name}' caught error, using fallback: {e}")
                return fallback()
            raise

    def _allow_request(self) -> bool:
        """Return False while OPEN; move to HALF_OPEN once recovery time elapsed."""
        with self._lock:
            if self._state != CircuitState.OPEN:
                return True
            if self._should_attempt_reset():
                self._state = CircuitState.HALF_OPEN
                logger.info(f"Circuit breaker '{self._name}' entering HALF_OPEN")
                return True
            return False

    def _on_success(self) -> None:
        with self._lock:
            self._failure_count = 0
            if self._state == CircuitState.HALF_OPEN:
                self._state = CircuitState.CLOSED
                logger.info(f"Circuit breaker '{self._name}' recovered to CLOSED")

    def _on_failure(self) -> None:
        with self._lock:
            self._failure_count += 1
            self._last_failure_time = time.time()

            if self._failure_count >= self._failure_threshold:
                self._state = CircuitState.OPEN
                logger.error(
                    f"Circuit breaker '{self._name}' OPENED after "
                    f"{self._failure_count} failures"
                )

    def _should_attempt_reset(self) -> bool:
        if self._last_failure_time is None:
            return True
        elapsed = time.time() - self._last_failure_time
        return elapsed >= self._recovery_timeout_sec

    def reset(self) -> None:
        """Manually reset the circuit breaker."""
        with self._lock:
            self._state = CircuitState.CLOSED
            self._failure_count = 0
            self._last_failure_time = None
            logger.info(f"Circuit breaker '{self._name}' manually reset")


class CircuitBreakerRegistry:
    """
    Lazily created circuit breakers, one per key.

    Each channel gets its own breaker so a dead channel never blocks
    fetches for the others.

    Usage:
        breakers = CircuitBreakerRegistry("channel_videos", failure_threshold=5)
        videos = await breakers.get(cid).call_async(lambda: fetcher.get_channel_videos(cid))
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        recovery_timeout_sec: float = 30,
    ) -> None:
        self._name = name
        self._failure_threshold = failure_threshold
        self._recovery_timeout_sec = recovery_timeout_sec
        self._breakers: Dict[str, CircuitBreaker] = {}
        self._lock = Lock()

    @property
    def name(self) -> str:
        return self._name

    def get(self, key: str) -> CircuitBreaker:
        """Return the breaker for `key`, creating a CLOSED one on first use."""
        with self._lock:
            breaker = self._breakers.get(key)
            if breaker is None:
                breaker = CircuitBreaker(
                    name=f"{self._name}:{key}",
                    failure_threshold=self._failure_threshold,
                    recovery_timeout_sec=self._recovery_timeout_sec,
                )
                self._breakers[key] = breaker
            return breaker

    def discard(self, key: str) -> None:
        """Forget the breaker for `key`."""
        with self._lock:
            self._breakers.pop(key, None)

    def open_keys(self) -> List[str]:
        """Keys whose breaker is currently OPEN."""
        with self._lock:
            return [
                key for key, breaker in self._breakers.items()
                if breaker.state == CircuitState.OPEN
            ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._breakers)
