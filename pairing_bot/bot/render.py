# user-visible text built from a record

from __future__ import annotations

import html
from typing import TYPE_CHECKING, Iterable

from pairing_bot.db.models import Recurser

if TYPE_CHECKING:
    from pairing_bot.texts import Texts

ANY_STREAM = "any"


def join_days(days: Iterable[str], wrap: str = "{}") -> str:
    """Turn ["monday", "friday"] into "Mondays and Fridays".

    Three or more days get commas and a final ", and". An empty list gives
    an empty string, callers decide what to say instead.
    """
    words = [wrap.format(f"{day.capitalize()}s") for day in days]
    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    if len(words) == 2:
        return f"{words[0]} and {words[1]}"
    return ", ".join(words[:-1]) + f", and {words[-1]}"


def days_phrase(rec: Recurser, texts: Texts) -> str:
    phrase = join_days(rec.schedule.active_days())
    return phrase or texts.no_days


def streams_phrase(rec: Recurser, texts: Texts) -> str:
    items = []
    if ANY_STREAM in rec.streams:
        items.append(texts.any_stream_item.format(count=rec.streams[ANY_STREAM]))
    for topic, count in rec.streams.items():
        if topic == ANY_STREAM:
            continue
        items.append(texts.stream_item.format(count=count, stream=html.escape(topic)))

    if not items:
        return texts.no_streams
    if len(items) > 1:
        items[-1] = f"and {items[-1]}"
    return ", ".join(items)


def skip_phrase(rec: Recurser, texts: Texts) -> str:
    return texts.skipping if rec.is_skipping_tomorrow else texts.not_skipping


def render_status(rec: Recurser, texts: Texts) -> str:
    return texts.status.format(
        name=html.escape(rec.name),
        days=days_phrase(rec, texts),
        streams=streams_phrase(rec, texts),
        skip=skip_phrase(rec, texts),
    )
