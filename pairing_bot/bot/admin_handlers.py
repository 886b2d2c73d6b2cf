import html

from aiogram import Router
from aiogram.types import Message
from aiogram.filters import Command

from pairing_bot.services.matching import select_eligible
from pairing_bot.utils.time import today_in, weekday_name

router = Router()

def is_admin(chat_id: int, settings) -> bool:
    return chat_id in settings.admin_ids

def fmt_recurser(r) -> str:
    days = ",".join(d[:3] for d in r.schedule.active_days()) or "-"
    streams = " ".join(f"{t}:{c}" for t, c in r.streams.items()) or "-"
    skip = " skip" if r.is_skipping_tomorrow else ""
    return html.escape(f"{r.id} | {r.name or '-'} | {days} | {streams}{skip}")

@router.message(Command("eligible"))
async def eligible_cmd(message: Message, repo, settings):
    if not is_admin(message.chat.id, settings):
        return
    weekday = weekday_name(today_in(settings.tz))
    recs = await select_eligible(repo, weekday)
    if not recs:
        await message.answer(f"Nobody is eligible on {weekday}.")
        return

    lines = [fmt_recurser(r) for r in recs[:200]]
    text = f"Eligible on {weekday} ({len(recs)}):\n" + "\n".join(lines)
    # Telegram caps message length
    if len(text) > 3800:
        text = text[:3800] + "\n... (cut)"
    await message.answer(text)

@router.message(Command("recursers"))
async def recursers_cmd(message: Message, repo, settings):
    if not is_admin(message.chat.id, settings):
        return
    recs = await repo.list_recursers()
    skipping = sum(1 for r in recs if r.is_skipping_tomorrow)
    await message.answer(f"Subscribed: {len(recs)}\nSkipping tomorrow: {skipping}")
