import asyncio
import logging
from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from pairing_bot.config import settings
from pairing_bot.texts import texts
from pairing_bot.db.connection import get_db
from pairing_bot.db.repository import Repository
from pairing_bot.bot.handlers import router as user_router
from pairing_bot.bot.admin_handlers import router as admin_router
from pairing_bot.services.matching import run_daily_match


async def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    bot = Bot(token=settings.bot_token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    dp = Dispatcher()

    # admin first, the user router takes every text message
    dp.include_router(admin_router)
    dp.include_router(user_router)

    db = await get_db(use_fake=settings.use_fake_db, dsn=settings.pg_dsn)
    repo = Repository(db=db)

    @dp.update.outer_middleware()
    async def inject(handler, event, data):
        data["repo"] = repo
        data["settings"] = settings
        data["texts"] = texts
        return await handler(event, data)

    scheduler = AsyncIOScheduler(timezone=settings.tz)

    async def daily_job():
        await run_daily_match(repo, settings.tz)

    scheduler.add_job(
        daily_job,
        CronTrigger(hour=settings.match_hour, minute=settings.match_minute),
        max_instances=1,
        coalesce=True,
    )
    scheduler.start()

    await dp.start_polling(bot)


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
