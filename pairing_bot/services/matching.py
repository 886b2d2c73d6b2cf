# daily eligibility set (who could be paired today); pairing itself is not done here

from __future__ import annotations

import logging
from datetime import date
from typing import Awaitable, Callable, List, Optional

from pairing_bot.db.models import Recurser
from pairing_bot.utils.time import today_in, weekday_name

logger = logging.getLogger("bot.matching")

Consumer = Callable[[str, List[Recurser]], Awaitable[None]]


async def select_eligible(repo, weekday: str) -> List[Recurser]:
    return await repo.list_eligible(weekday)


async def log_candidates(weekday: str, candidates: List[Recurser]) -> None:
    # placeholder until something actually forms pairs
    names = ", ".join(r.name or r.id for r in candidates) or "-"
    logger.info("eligible on %s: %s", weekday, names)


async def run_daily_match(
    repo,
    tz: str,
    consumer: Optional[Consumer] = None,
    day: Optional[date] = None,
) -> List[Recurser]:
    weekday = weekday_name(day or today_in(tz))
    candidates = await select_eligible(repo, weekday)
    logger.info("daily match: %d recursers eligible on %s", len(candidates), weekday)
    await (consumer or log_candidates)(weekday, candidates)
    return candidates
