from __future__ import annotations

import copy
import json
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from pairing_bot.db.models import WEEKDAYS, Recurser, Schedule
from pairing_bot.errors import StoreAccessError

COLUMNS = "id, name, is_skipping_tomorrow, schedule, streams"

# fields a merge may touch, and whether the column is JSONB
MERGEABLE = {
    "name": False,
    "is_skipping_tomorrow": False,
    "schedule": True,
    "streams": True,
}


def _to_doc(rec: Recurser) -> Dict[str, Any]:
    return {
        "id": rec.id,
        "name": rec.name,
        "is_skipping_tomorrow": rec.is_skipping_tomorrow,
        "schedule": rec.schedule.to_dict(),
        # list of pairs: JSONB does not keep object key order
        "streams": [[topic, count] for topic, count in rec.streams.items()],
    }


def _field_value(name: str, value: Any) -> Any:
    if name == "schedule":
        return value.to_dict()
    if name == "streams":
        return [[topic, count] for topic, count in value.items()]
    return value


def _from_doc(doc: Dict[str, Any]) -> Recurser:
    return Recurser(
        id=doc["id"],
        name=doc.get("name") or "",
        is_skipping_tomorrow=bool(doc.get("is_skipping_tomorrow", False)),
        schedule=Schedule.from_dict(doc.get("schedule") or {}),
        streams={str(topic): int(count) for topic, count in (doc.get("streams") or [])},
    )


def _check_fields(fields: Dict[str, Any]) -> None:
    unknown = set(fields) - set(MERGEABLE)
    if unknown:
        raise ValueError(f"cannot merge unknown fields: {sorted(unknown)}")


class Repository:
    def __init__(self, db):
        self.db = db  # FakeDatabase or asyncpg.Pool

    def _is_fake(self) -> bool:
        return hasattr(self.db, "recursers")

    @asynccontextmanager
    async def _conn(self, op: str):
        try:
            async with self.db.acquire() as conn:
                yield conn
        except Exception as e:
            raise StoreAccessError(op, e) from e

    # -------------------- POSTGRES --------------------

    def _row_to_recurser(self, row: Any) -> Recurser:
        return _from_doc(
            {
                "id": row["id"],
                "name": row["name"],
                "is_skipping_tomorrow": row["is_skipping_tomorrow"],
                "schedule": json.loads(row["schedule"]),
                "streams": json.loads(row["streams"]),
            }
        )

    # -------------------- PUBLIC API --------------------

    async def get(self, user_id: str) -> Optional[Recurser]:
        """None means the user is not subscribed."""
        if self._is_fake():
            doc = self.db.recursers.get(user_id)
            return _from_doc(copy.deepcopy(doc)) if doc is not None else None

        async with self._conn("get") as conn:
            row = await conn.fetchrow(
                f"SELECT {COLUMNS} FROM recursers WHERE id=$1",
                user_id,
            )
        return self._row_to_recurser(row) if row else None

    async def upsert(self, rec: Recurser) -> None:
        doc = _to_doc(rec)
        if self._is_fake():
            self.db.recursers[rec.id] = doc
            return

        async with self._conn("upsert") as conn:
            await conn.execute(
                """
                INSERT INTO recursers (id, name, is_skipping_tomorrow, schedule, streams)
                VALUES ($1, $2, $3, $4::jsonb, $5::jsonb)
                ON CONFLICT (id) DO UPDATE
                SET name=EXCLUDED.name,
                    is_skipping_tomorrow=EXCLUDED.is_skipping_tomorrow,
                    schedule=EXCLUDED.schedule,
                    streams=EXCLUDED.streams
                """,
                doc["id"],
                doc["name"],
                doc["is_skipping_tomorrow"],
                json.dumps(doc["schedule"]),
                json.dumps(doc["streams"], ensure_ascii=False),
            )

    async def merge(self, user_id: str, fields: Dict[str, Any]) -> None:
        """Overwrite only the given fields. A missing record stays missing."""
        _check_fields(fields)
        values = {name: _field_value(name, value) for name, value in fields.items()}

        if self._is_fake():
            doc = self.db.recursers.get(user_id)
            if doc is not None:
                doc.update(copy.deepcopy(values))
            return

        sets = []
        params: List[Any] = [user_id]
        for name, value in values.items():
            params.append(json.dumps(value, ensure_ascii=False) if MERGEABLE[name] else value)
            cast = "::jsonb" if MERGEABLE[name] else ""
            sets.append(f"{name}=${len(params)}{cast}")

        async with self._conn("merge") as conn:
            await conn.execute(
                f"UPDATE recursers SET {', '.join(sets)} WHERE id=$1",
                *params,
            )

    async def delete(self, user_id: str) -> None:
        if self._is_fake():
            self.db.recursers.pop(user_id, None)
            return

        async with self._conn("delete") as conn:
            await conn.execute("DELETE FROM recursers WHERE id=$1", user_id)

    async def list_eligible(self, weekday: str) -> List[Recurser]:
        """Not skipping tomorrow and scheduled on ``weekday``."""
        if weekday not in WEEKDAYS:
            raise ValueError(f"unknown weekday {weekday!r}")

        if self._is_fake():
            recs = [_from_doc(copy.deepcopy(d)) for d in self.db.recursers.values()]
            recs = [r for r in recs if not r.is_skipping_tomorrow and r.schedule.is_on(weekday)]
            return sorted(recs, key=lambda r: r.id)

        async with self._conn("list_eligible") as conn:
            rows = await conn.fetch(
                f"""
                SELECT {COLUMNS}
                FROM recursers
                WHERE NOT is_skipping_tomorrow
                  AND COALESCE((schedule->>$1)::boolean, FALSE)
                ORDER BY id
                """,
                weekday,
            )
        return [self._row_to_recurser(r) for r in rows]

    async def list_recursers(self) -> List[Recurser]:
        if self._is_fake():
            recs = [_from_doc(copy.deepcopy(d)) for d in self.db.recursers.values()]
            return sorted(recs, key=lambda r: r.id)

        async with self._conn("list_recursers") as conn:
            rows = await conn.fetch(f"SELECT {COLUMNS} FROM recursers ORDER BY id")
        return [self._row_to_recurser(r) for r in rows]
