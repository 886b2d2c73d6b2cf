# record shapes (dataclass)

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Dict, Iterable

# calendar order, lower-case as users type them
WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


@dataclass(frozen=True)
class Schedule:
    monday: bool = False
    tuesday: bool = False
    wednesday: bool = False
    thursday: bool = False
    friday: bool = False
    saturday: bool = False
    sunday: bool = False

    @classmethod
    def from_days(cls, days: Iterable[str]) -> Schedule:
        """Blank week with each listed day switched on. Repeats are harmless."""
        return cls(**{day: True for day in days})

    @classmethod
    def from_dict(cls, raw: Dict[str, bool]) -> Schedule:
        return cls(**{day: bool(raw.get(day, False)) for day in WEEKDAYS})

    def to_dict(self) -> Dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def active_days(self) -> list[str]:
        return [day for day in WEEKDAYS if getattr(self, day)]

    def is_on(self, day: str) -> bool:
        return bool(getattr(self, day))


@dataclass
class Recurser:
    # one row per subscribed user; no row means not subscribed
    id: str
    name: str
    is_skipping_tomorrow: bool = False
    schedule: Schedule = field(default_factory=Schedule)
    # topic -> pairings per day, insertion order is display order
    streams: Dict[str, int] = field(default_factory=dict)

    def with_fields(self, **changes) -> Recurser:
        return replace(self, **changes)
