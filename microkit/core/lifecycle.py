"""
Process Shutdown Handling

Registers signal handlers that close open connections and subscriptions
before the process exits. Closing is best-effort: errors are logged and
do not stop the remaining resources from being closed.

Usage:
    provider = MongoConnectionProvider(...)
    nats_client = NatsClient(...)

    install_shutdown_handlers(provider.close, nats_client.try_close)
"""

import asyncio
import signal
from collections.abc import Awaitable, Callable, Iterable

from microkit.core.logging import get_logger

logger = get_logger(__name__)

Closer = Callable[[], Awaitable[object]]

# Running close_all tasks; the loop keeps only weak references to tasks
_shutdown_tasks: set[asyncio.Task] = set()

SHUTDOWN_SIGNALS: tuple[signal.Signals, ...] = tuple(
    getattr(signal, name)
    for name in ("SIGINT", "SIGTERM", "SIGUSR1", "SIGUSR2")
    if hasattr(signal, name)
)


async def close_all(closers: Iterable[Closer]) -> None:
    """Await every closer in order, logging and discarding their errors."""
    for close in closers:
        try:
            await close()
        except Exception as e:
            logger.warning(
                "Error while closing resource",
                stage="SHUTDOWN.CLOSE",
                closer=getattr(close, "__qualname__", repr(close)),
                error=str(e),
            )


def install_shutdown_handlers(
    *closers: Closer,
    loop: asyncio.AbstractEventLoop | None = None,
    signals: Iterable[signal.Signals] = SHUTDOWN_SIGNALS,
) -> list[signal.Signals]:
    """
    Close ``closers`` when the process receives a shutdown signal.

    Each signal handler fires once; a second signal of the same kind falls
    back to the default behaviour.

    Args:
        *closers: Async callables such as ``provider.close``
        loop: Event loop to register on (default: running loop)
        signals: Signals to handle

    Returns:
        The signals that were registered (platforms without
        ``add_signal_handler`` support register none).
    """
    loop = loop or asyncio.get_running_loop()
    registered: list[signal.Signals] = []

    def on_signal(sig: signal.Signals) -> None:
        logger.info("Shutdown signal received", stage="SHUTDOWN.SIGNAL", signal=sig.name)
        loop.remove_signal_handler(sig)
        task = loop.create_task(close_all(closers))
        _shutdown_tasks.add(task)
        task.add_done_callback(_shutdown_tasks.discard)

    for sig in signals:
        try:
            loop.add_signal_handler(sig, on_signal, sig)
        except (NotImplementedError, RuntimeError, ValueError):
            logger.debug("Signal handler not supported", stage="SHUTDOWN.SIGNAL", signal=sig.name)
            continue
        registered.append(sig)

    return registered
