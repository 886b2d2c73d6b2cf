from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict

SCHEMA = """
CREATE TABLE IF NOT EXISTS recursers (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL DEFAULT '',
    is_skipping_tomorrow BOOLEAN NOT NULL DEFAULT FALSE,
    schedule JSONB NOT NULL,
    streams JSONB NOT NULL DEFAULT '[]'::jsonb
)
"""

@dataclass
class FakeDatabase:
    # key = user id, value = stored document
    recursers: Dict[str, Dict[str, Any]] = field(default_factory=dict)

async def get_db(use_fake: bool, dsn: str):
    """
    use_fake=True -> FakeDatabase (in memory, lost on restart).
    Otherwise -> asyncpg pool with the recursers table in place.
    """
    if use_fake:
        return FakeDatabase()

    import asyncpg  # the fake mode runs without asyncpg installed
    pool = await asyncpg.create_pool(dsn=dsn, min_size=1, max_size=10)
    async with pool.acquire() as conn:
        await conn.execute(SCHEMA)
    return pool
