"""Category rotation: which kind of interval comes next."""

from __future__ import annotations

import logging

from tomato_log.core.errors import NoIntervalsError
from tomato_log.core.interval import Category
from tomato_log.storage.repository import IntervalRepository

logger = logging.getLogger(__name__)

# Breaks inspected when a work interval just ended; a window without a
# long break means the cycle of four work intervals is complete.
BREAK_LOOKBACK = 3


async def next_category(repo: IntervalRepository) -> Category:
    """Decide the category of the next interval from the stored history.

    The cycle position is rebuilt from history on every call:
    a break is always followed by work, and work is followed by a short
    break unless the last three breaks hold no long break.
    """
    try:
        last = await repo.get_last()
    except NoIntervalsError:
        return Category.WORK

    if last.category.is_break:
        return Category.WORK

    breaks = await repo.get_recent_breaks(BREAK_LOOKBACK)
    if len(breaks) < BREAK_LOOKBACK:
        return Category.SHORT_BREAK

    if any(b.category is Category.LONG_BREAK for b in breaks):
        return Category.SHORT_BREAK

    logger.debug("Cycle complete, long break due")
    return Category.LONG_BREAK
