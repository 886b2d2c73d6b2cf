# private text messages -> command -> reply

from aiogram import Router, F
from aiogram.enums import ChatType
from aiogram.types import Message

from pairing_bot.bot.dispatch import dispatch
from pairing_bot.bot.parse import parse_command

import logging

logger = logging.getLogger("bot")

router = Router()


def strip_slash(text: str) -> str:
    """Telegram clients send `/subscribe` or `/subscribe@SomeBot`; keep the bare word."""
    stripped = text.lstrip()
    if not stripped.startswith("/"):
        return text
    first, _, rest = stripped[1:].partition(" ")
    first = first.split("@", 1)[0]
    return f"{first} {rest}" if rest else first


async def addressed_to_bot(message: Message) -> bool:
    text = (message.text or "").lstrip()
    if text.startswith("/"):
        return True
    me = await message.bot.me()
    return bool(me.username) and f"@{me.username.lower()}" in text.lower()


@router.message(F.text)
async def on_text(message: Message, repo, settings, texts):
    if message.chat.type != ChatType.PRIVATE:
        # in groups only speak when spoken to
        if await addressed_to_bot(message):
            await message.answer(texts.private_only)
        return

    user = message.from_user
    if settings.allowed_user_ids and user.id not in settings.allowed_user_ids:
        await message.answer(texts.not_allowed)
        return

    cmd = parse_command(strip_slash(message.text))
    if cmd.error is not None:
        logger.info("user %s sent an invalid command: %s", user.id, cmd.error)

    reply = await dispatch(
        repo,
        texts,
        cmd,
        user_id=str(user.id),
        user_name=user.full_name,
    )
    if reply.error is not None:
        logger.error("command %s for user %s failed: %s", cmd.verb, user.id, reply.error)

    # empty reply = say nothing
    if reply.text:
        await message.answer(reply.text)
