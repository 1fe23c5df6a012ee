"""Timing actions: randomized sleeps and politeness pauses.

Design rules:
  - Settle delays after navigation are randomized.
  - Floor values are enforced in code regardless of caller args.
"""

import asyncio
import logging
import random

logger = logging.getLogger(__name__)

# Settle window after a page load (seconds).
SETTLE_DELAY_MIN = 1.0
SETTLE_DELAY_MAX = 2.0


async def random_sleep(min_s: float, max_s: float) -> float:
    """Sleep for a random duration between min_s and max_s seconds.

    Floor enforcement: min_s is always respected as the absolute minimum.
    If max_s < min_s, max_s is raised to min_s.

    Returns the actual sleep duration (useful for testing).
    """
    floor = max(min_s, 0.0)
    ceiling = max(max_s, floor)
    duration = random.uniform(floor, ceiling)
    await asyncio.sleep(duration)
    return duration


async def settle_delay() -> float:
    """Short randomized pause so late-rendering content can finish."""
    return await random_sleep(SETTLE_DELAY_MIN, SETTLE_DELAY_MAX)


async def politeness_delay(seconds: float) -> float:
    """Fixed pause between platforms. Zero or negative means no pause."""
    if seconds <= 0:
        return 0.0
    logger.info("Waiting %.1fs before next platform...", seconds)
    await asyncio.sleep(seconds)
    return seconds
