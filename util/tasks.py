# util/tasks.py
import asyncio
import logging
from typing import Any, Coroutine, Set

logger = logging.getLogger(__name__)

# Detached tasks are only weakly referenced by the event loop; keep them here until done.
_pending: Set[asyncio.Task] = set()


def _on_done(task: asyncio.Task) -> None:
    _pending.discard(task)
    if task.cancelled():
        logger.warning("background.cancelled task=%s", task.get_name())
        return
    exc = task.exception()
    if exc is not None:
        logger.warning(
            "background.error task=%s err=%s: %s",
            task.get_name(),
            type(exc).__name__,
            exc,
        )


def spawn(coro: Coroutine[Any, Any, Any], *, name: str) -> asyncio.Task:
    """
    Fire-and-forget: schedule `coro` on the running loop.
    - The caller never awaits it; failures are routed to the log only.
    """
    task = asyncio.get_running_loop().create_task(coro, name=name)
    _pending.add(task)
    task.add_done_callback(_on_done)
    return task


def pending_count() -> int:
    return len(_pending)


async def drain() -> None:
    """Wait for every detached task scheduled so far (shutdown, tests)."""
    while _pending:
        await asyncio.gather(*list(_pending), return_exceptions=True)
