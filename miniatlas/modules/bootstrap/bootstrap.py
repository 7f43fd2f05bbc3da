"""
Connectivity Bootstrap.

Confirms the control plane answers before the server accepts requests. This
is the only place Mini-Atlas retries anything; mutations and reads are never
retried, so a control-plane error is never hidden behind a repeated call.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from ...config.provider import BootstrapConfig
from ..controlplane import ControlPlane
from ..errors import BootstrapError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 1.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Run an async operation with exponential backoff.

    Waits base_delay * 2 ** (attempt - 1) seconds after each failed attempt
    except the last.

    Args:
        operation: Zero-argument coroutine function
        max_attempts: Total attempts, at least 1
        base_delay: Delay after the first failure, in seconds
        sleep: Awaitable sleep, injectable for tests

    Returns:
        The operation's result

    Raises:
        The last error once all attempts have failed
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except Exception as e:
            if attempt == max_attempts:
                raise

            delay = base_delay * 2 ** (attempt - 1)
            logger.warning(
                f"Operation failed (attempt {attempt}/{max_attempts}), retrying in {delay:g}s: {e}"
            )
            await sleep(delay)

    raise AssertionError("unreachable")


class ConnectivityBootstrap:
    """Startup check that the control plane is reachable."""

    def __init__(
        self,
        control_plane: ControlPlane,
        config: Optional[BootstrapConfig] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.control_plane = control_plane
        self.config = config or BootstrapConfig()
        self._sleep = sleep

    async def ensure_connected(self) -> None:
        """
        Ping the control plane until it answers or the retry budget is spent.

        Raises:
            BootstrapError: If every attempt failed; the process must not serve
        """
        try:
            await retry(
                self.control_plane.ping,
                max_attempts=self.config.max_attempts,
                base_delay=self.config.base_delay,
                sleep=self._sleep,
            )
        except Exception as e:
            logger.error(
                f"Kubernetes API unreachable after {self.config.max_attempts} attempts: {e}"
            )
            raise BootstrapError(
                f"Could not connect to the Kubernetes API: {e}", self.config.max_attempts
            ) from e

        logger.info("Kubernetes API connectivity verified")
