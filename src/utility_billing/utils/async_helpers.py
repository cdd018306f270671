from __future__ import annotations

import asyncio
import concurrent.futures
from typing import Any, Coroutine, TypeVar

from utility_billing.core.exceptions import APITimeoutError

T = TypeVar("T")


async def _bounded(coro: Coroutine[Any, Any, T], timeout: float | None) -> T:
    if timeout is None:
        return await coro
    try:
        return await asyncio.wait_for(coro, timeout)
    except TimeoutError as exc:
        raise APITimeoutError(f"Billing API action did not finish within {timeout}s") from exc


def run_sync(coro: Coroutine[Any, Any, T], *, timeout: float | None = None) -> T:
    """Drive one flow action to completion from synchronous code.

    Streamlit runs page scripts on a plain thread, so there is normally no
    loop and :func:`asyncio.run` is used.  When a loop is already running
    (async tests, notebooks) the action runs in a fresh loop on a worker
    thread instead.

    Args:
        coro: The action, e.g. ``BillCalculator(gw).calculate("100")``.
        timeout: Overall deadline in seconds; ``None`` waits indefinitely.

    Raises:
        APITimeoutError: If *timeout* elapses first.
    """
    bounded = _bounded(coro, timeout)
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(bounded)

    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, bounded).result()
