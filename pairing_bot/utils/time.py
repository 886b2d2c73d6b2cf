from datetime import datetime, date
from zoneinfo import ZoneInfo

from pairing_bot.db.models import WEEKDAYS

def now_in(tz_name: str = "UTC") -> datetime:
    return datetime.now(tz=ZoneInfo(tz_name))

def today_in(tz_name: str = "UTC") -> date:
    return now_in(tz_name).date()

def weekday_name(day: date) -> str:
    # date.weekday(): Monday == 0
    return WEEKDAYS[day.weekday()]
