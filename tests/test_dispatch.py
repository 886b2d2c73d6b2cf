"""Tests for the command -> state transition -> reply flow."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from pairing_bot.bot.dispatch import SideEffect, decide, dispatch
from pairing_bot.bot.parse import parse_command
from pairing_bot.config import Settings
from pairing_bot.db.models import Recurser, Schedule
from pairing_bot.errors import StoreAccessError
from pairing_bot.texts import build_texts

from conftest import DEFAULT_DAYS

USER = "215391"
NAME = "Grace Hopper"


async def _send(repo, texts, raw: str, name: str = NAME):
    return await dispatch(
        repo,
        texts,
        parse_command(raw),
        user_id=USER,
        user_name=name,
    )


async def _subscribed(repo, **changes) -> Recurser:
    rec = Recurser(id=USER, name=NAME, schedule=Schedule.from_days(DEFAULT_DAYS))
    rec = rec.with_fields(**changes)
    await repo.upsert(rec)
    return rec


@pytest.mark.anyio
async def test_subscribe_creates_default_record(repo, texts) -> None:
    reply = await _send(repo, texts, "subscribe")

    assert reply.text == texts.subscribed
    assert reply.effect is SideEffect.UPSERT
    assert reply.error is None
    rec = await repo.get(USER)
    assert rec == Recurser(
        id=USER,
        name=NAME,
        is_skipping_tomorrow=False,
        schedule=Schedule.from_days(DEFAULT_DAYS),
        streams={},
    )


@pytest.mark.anyio
async def test_subscribe_twice(repo, texts) -> None:
    await _subscribed(repo, streams={"math": 1})
    reply = await _send(repo, texts, "subscribe")
    assert reply.text == texts.already_subscribed
    assert reply.effect is SideEffect.NONE
    assert (await repo.get(USER)).streams == {"math": 1}


@pytest.mark.anyio
async def test_subscribe_message_lists_default_days(texts) -> None:
    assert "<b>Mondays</b>, <b>Tuesdays</b>" in texts.subscribed
    assert "and <b>Fridays</b>" in texts.subscribed


@pytest.mark.anyio
async def test_unsubscribe(repo, texts) -> None:
    await _subscribed(repo)
    reply = await _send(repo, texts, "unsubscribe")
    assert reply.text == texts.unsubscribed
    assert reply.effect is SideEffect.DELETE
    assert await repo.get(USER) is None


@pytest.mark.anyio
@pytest.mark.parametrize(
    "raw",
    ["unsubscribe", "schedule monday", "streams any 1", "skip tomorrow", "unskip tomorrow", "status"],
)
async def test_needs_subscription(repo, texts, raw: str) -> None:
    reply = await _send(repo, texts, raw)
    assert reply.text == texts.not_subscribed
    assert reply.effect is SideEffect.NONE
    assert await repo.get(USER) is None


@pytest.mark.anyio
async def test_schedule_replaces_whole_week(repo, texts) -> None:
    await _subscribed(repo)

    reply = await _send(repo, texts, "schedule monday wednesday friday")
    assert reply.text == texts.schedule_set
    assert "status" in reply.text
    assert reply.effect is SideEffect.MERGE
    assert (await repo.get(USER)).schedule.active_days() == ["monday", "wednesday", "friday"]

    await _send(repo, texts, "schedule sunday")
    assert (await repo.get(USER)).schedule == Schedule(sunday=True)


@pytest.mark.anyio
async def test_schedule_is_idempotent(repo, texts) -> None:
    await _subscribed(repo)
    await _send(repo, texts, "schedule monday")
    once = await repo.get(USER)
    await _send(repo, texts, "schedule monday")
    assert await repo.get(USER) == once


@pytest.mark.anyio
async def test_streams_replace_and_render_in_status(repo, texts) -> None:
    await _subscribed(repo, streams={"old": 5})

    reply = await _send(repo, texts, "streams any 2 pairing 1")
    assert reply.text == texts.streams_set
    rec = await repo.get(USER)
    assert rec.streams == {"any": 2, "pairing": 1}

    status = await _send(repo, texts, "status")
    assert status.effect is SideEffect.NONE
    any_at = status.text.index("2 pairings with any recurser")
    topic_at = status.text.index("stream pairing")
    assert any_at < topic_at
    assert "old" not in status.text


@pytest.mark.anyio
async def test_skip_and_unskip(repo, texts) -> None:
    await _subscribed(repo)

    reply = await _send(repo, texts, "skip tomorrow")
    assert reply.text == texts.skipped
    assert (await repo.get(USER)).is_skipping_tomorrow is True

    reply = await _send(repo, texts, "unskip tomorrow")
    assert reply.text == texts.unskipped
    assert (await repo.get(USER)).is_skipping_tomorrow is False


@pytest.mark.anyio
async def test_writes_refresh_display_name(repo, texts) -> None:
    await _subscribed(repo)
    await _send(repo, texts, "skip tomorrow", name="Grace B. Hopper")
    rec = await repo.get(USER)
    assert rec.name == "Grace B. Hopper"
    assert rec.schedule == Schedule.from_days(DEFAULT_DAYS)


@pytest.mark.anyio
async def test_status_uses_current_name(repo, texts) -> None:
    await _subscribed(repo)
    reply = await _send(repo, texts, "status", name="Amazing Grace")
    assert "You're Amazing Grace" in reply.text


@pytest.mark.anyio
async def test_malformed_command_gets_help_without_writes(repo, texts) -> None:
    await _subscribed(repo)
    before = await repo.get(USER)

    reply = await _send(repo, texts, "skip now")
    assert reply.text == texts.help
    assert reply.effect is SideEffect.NONE
    assert await repo.get(USER) == before


@pytest.mark.anyio
async def test_help_regardless_of_subscription(repo, texts) -> None:
    assert (await _send(repo, texts, "help")).text == texts.help
    await _subscribed(repo)
    assert (await _send(repo, texts, "help")).text == texts.help


@pytest.mark.anyio
async def test_status_when_not_subscribed_only_reads(texts) -> None:
    repo = AsyncMock()
    repo.get = AsyncMock(return_value=None)

    reply = await _send(repo, texts, "status")

    assert reply.text == texts.not_subscribed
    repo.get.assert_awaited_once_with(USER)
    repo.upsert.assert_not_awaited()
    repo.merge.assert_not_awaited()
    repo.delete.assert_not_awaited()


@pytest.mark.anyio
async def test_read_failure_short_circuits(texts) -> None:
    err = StoreAccessError("get", ConnectionResetError("gone"))
    repo = AsyncMock()
    repo.get = AsyncMock(side_effect=err)

    reply = await _send(repo, texts, "subscribe")

    assert reply.text == texts.read_error
    assert "@_**Test Maintainer**" in reply.text
    assert reply.error is err
    repo.upsert.assert_not_awaited()


@pytest.mark.anyio
async def test_write_failure_returns_write_apology(texts) -> None:
    err = StoreAccessError("merge", TimeoutError())
    repo = AsyncMock()
    repo.get = AsyncMock(return_value=Recurser(id=USER, name=NAME))
    repo.merge = AsyncMock(side_effect=err)

    reply = await _send(repo, texts, "schedule tuesday")

    assert reply.text == texts.write_error
    assert reply.error is err
    assert reply.effect is SideEffect.NONE


@pytest.mark.anyio
async def test_delete_failure_returns_write_apology(texts) -> None:
    repo = AsyncMock()
    repo.get = AsyncMock(return_value=Recurser(id=USER, name=NAME))
    repo.delete = AsyncMock(side_effect=StoreAccessError("delete"))

    reply = await _send(repo, texts, "unsubscribe")

    assert reply.text == texts.write_error


def test_decide_is_pure(texts) -> None:
    rec = Recurser(id=USER, name=NAME)
    action = decide(parse_command("streams math 1 math 2"), rec, USER, NAME, texts)
    assert action.effect is SideEffect.MERGE
    assert action.fields == {"streams": {"math": 2}, "name": NAME}
    assert rec.streams == {}


@pytest.mark.anyio
async def test_subscribe_schedule_matches_confirmation_text(repo) -> None:
    texts = build_texts(Settings(default_schedule=("tuesday", "thursday")))

    reply = await dispatch(repo, texts, parse_command("subscribe"), "1", "A")

    rec = await repo.get("1")
    assert rec.schedule.active_days() == ["tuesday", "thursday"]
    assert "<b>Tuesdays</b> and <b>Thursdays</b>" in reply.text
