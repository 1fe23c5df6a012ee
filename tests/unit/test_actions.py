"""Tests for timing actions: random_sleep, settle_delay, politeness_delay."""

import asyncio
from unittest.mock import AsyncMock, patch

from gigscraper.browser.actions import (
    SETTLE_DELAY_MAX,
    SETTLE_DELAY_MIN,
    politeness_delay,
    random_sleep,
    settle_delay,
)

# ---------------------------------------------------------------------------
# TestRandomSleep
# ---------------------------------------------------------------------------


class TestRandomSleep:
    """random_sleep: floor enforcement, range, actual sleeping."""

    async def test_duration_in_range(self) -> None:
        with patch.object(asyncio, "sleep", new_callable=AsyncMock) as mock_sleep:
            duration = await random_sleep(0.1, 0.2)
        assert 0.1 <= duration <= 0.2
        mock_sleep.assert_awaited_once_with(duration)

    async def test_inverted_bounds_clamped_to_min(self) -> None:
        with patch.object(asyncio, "sleep", new_callable=AsyncMock):
            duration = await random_sleep(3.0, 1.0)
        assert duration == 3.0

    async def test_negative_min_clamped_to_zero(self) -> None:
        with patch.object(asyncio, "sleep", new_callable=AsyncMock):
            for _ in range(10):
                assert await random_sleep(-2.0, 0.5) >= 0.0


# ---------------------------------------------------------------------------
# TestSettleDelay
# ---------------------------------------------------------------------------


class TestSettleDelay:
    async def test_within_settle_window(self) -> None:
        with patch.object(asyncio, "sleep", new_callable=AsyncMock) as mock_sleep:
            for _ in range(20):
                duration = await settle_delay()
                assert SETTLE_DELAY_MIN <= duration <= SETTLE_DELAY_MAX
        assert mock_sleep.await_count == 20


# ---------------------------------------------------------------------------
# TestPolitenessDelay
# ---------------------------------------------------------------------------


class TestPolitenessDelay:
    async def test_sleeps_exact_seconds(self) -> None:
        with patch.object(asyncio, "sleep", new_callable=AsyncMock) as mock_sleep:
            assert await politeness_delay(2.0) == 2.0
        mock_sleep.assert_awaited_once_with(2.0)

    async def test_zero_skips_sleep(self) -> None:
        with patch.object(asyncio, "sleep", new_callable=AsyncMock) as mock_sleep:
            assert await politeness_delay(0) == 0.0
        mock_sleep.assert_not_called()
