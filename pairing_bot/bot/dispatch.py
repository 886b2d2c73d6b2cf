# state transitions: parsed command + current record -> store change + reply

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pairing_bot.bot.parse import ParsedCommand, stream_pairs
from pairing_bot.bot.render import render_status
from pairing_bot.db.models import Recurser, Schedule
from pairing_bot.errors import StoreAccessError
from pairing_bot.texts import Texts

logger = logging.getLogger("bot.dispatch")


class SideEffect(enum.Enum):
    NONE = "none"
    UPSERT = "upsert"
    MERGE = "merge"
    DELETE = "delete"


@dataclass(frozen=True)
class Action:
    text: str
    effect: SideEffect = SideEffect.NONE
    record: Optional[Recurser] = None  # UPSERT
    fields: Dict[str, Any] = field(default_factory=dict)  # MERGE


@dataclass(frozen=True)
class Reply:
    text: str
    effect: SideEffect = SideEffect.NONE
    error: Optional[StoreAccessError] = None


def decide(
    cmd: ParsedCommand,
    rec: Optional[Recurser],
    user_id: str,
    user_name: str,
    texts: Texts,
) -> Action:
    """Pick the reply and the store change for one command.

    Pure: nothing here touches the store. Arguments are trusted, the
    tokenizer already checked their shape.
    """
    verb = cmd.verb

    if verb == "help":
        return Action(texts.help)

    if verb == "subscribe":
        if rec is not None:
            return Action(texts.already_subscribed)
        new = Recurser(
            id=user_id,
            name=user_name,
            is_skipping_tomorrow=False,
            schedule=Schedule.from_days(texts.default_schedule),
            streams={},
        )
        return Action(texts.subscribed, SideEffect.UPSERT, record=new)

    # everything below needs a subscription
    if rec is None:
        return Action(texts.not_subscribed)

    if verb == "unsubscribe":
        return Action(texts.unsubscribed, SideEffect.DELETE)

    if verb == "status":
        return Action(render_status(rec.with_fields(name=user_name), texts))

    if verb == "schedule":
        changes: Dict[str, Any] = {"schedule": Schedule.from_days(cmd.args)}
        reply = texts.schedule_set
    elif verb == "streams":
        changes = {"streams": stream_pairs(cmd.args)}
        reply = texts.streams_set
    elif verb == "skip":
        changes = {"is_skipping_tomorrow": True}
        reply = texts.skipped
    elif verb == "unskip":
        changes = {"is_skipping_tomorrow": False}
        reply = texts.unskipped
    else:
        raise ValueError(f"no transition for verb {verb!r}")

    # display name is refreshed on every write
    changes["name"] = user_name
    return Action(reply, SideEffect.MERGE, fields=changes)


async def apply(repo, user_id: str, action: Action) -> None:
    if action.effect is SideEffect.UPSERT:
        await repo.upsert(action.record)
    elif action.effect is SideEffect.MERGE:
        await repo.merge(user_id, action.fields)
    elif action.effect is SideEffect.DELETE:
        await repo.delete(user_id)


async def dispatch(
    repo,
    texts: Texts,
    cmd: ParsedCommand,
    user_id: str,
    user_name: str,
) -> Reply:
    try:
        rec = await repo.get(user_id)
    except StoreAccessError as e:
        return Reply(texts.read_error, error=e)

    action = decide(cmd, rec, user_id, user_name, texts)

    try:
        await apply(repo, user_id, action)
    except StoreAccessError as e:
        return Reply(texts.write_error, error=e)

    if action.effect is not SideEffect.NONE:
        logger.info("%s: %s for user %s", cmd.verb, action.effect.value, user_id)
    return Reply(action.text, action.effect)
