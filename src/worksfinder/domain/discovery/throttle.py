"""Paced iteration for rate-limited per-item enrichment."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterable


async def throttled[T](items: Iterable[T], *, delay_seconds: float) -> AsyncIterator[T]:
    """Yield ``items`` in order, sleeping ``delay_seconds`` between consecutive items."""

    for index, item in enumerate(items):
        if index and delay_seconds > 0:
            await asyncio.sleep(delay_seconds)
        yield item
