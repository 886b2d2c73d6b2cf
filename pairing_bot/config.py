from dataclasses import dataclass, field
import os
from dotenv import load_dotenv

from pairing_bot.db.models import WEEKDAYS

load_dotenv()

def _parse_ids(raw: str) -> set[int]:
    return {int(x.strip()) for x in raw.split(",") if x.strip()}

def _parse_days(raw: str) -> tuple[str, ...]:
    days = tuple(x.strip().lower() for x in raw.split(",") if x.strip())
    unknown = [d for d in days if d not in WEEKDAYS]
    if unknown:
        raise ValueError(f"DEFAULT_SCHEDULE has unknown weekdays: {', '.join(unknown)}")
    # keep calendar order whatever order the env var used
    return tuple(d for d in WEEKDAYS if d in days)

@dataclass(frozen=True)
class Settings:
    bot_token: str = os.getenv("BOT_TOKEN", "")
    use_fake_db: bool = os.getenv("USE_FAKE_DB", "1") == "1"
    tz: str = os.getenv("TZ", "UTC")
    admin_ids: set[int] = field(default_factory=lambda: _parse_ids(os.getenv("ADMIN_IDS", "")))
    # empty = everyone may talk to the bot
    allowed_user_ids: set[int] = field(default_factory=lambda: _parse_ids(os.getenv("ALLOWED_USER_IDS", "")))

    # daily eligibility run
    match_hour: int = int(os.getenv("MATCH_HOUR", "4"))
    match_minute: int = int(os.getenv("MATCH_MINUTE", "0"))

    # days switched on by `subscribe`
    default_schedule: tuple[str, ...] = field(
        default_factory=lambda: _parse_days(
            os.getenv("DEFAULT_SCHEDULE", "monday,tuesday,wednesday,thursday,friday")
        )
    )
    maintainer: str = os.getenv("MAINTAINER", "@maintainer")
    issues_url: str = os.getenv("ISSUES_URL", "https://github.com/thwidge/pairing-bot/issues")

    # Postgres
    pg_host: str = os.getenv("PG_HOST", "localhost")
    pg_port: int = int(os.getenv("PG_PORT", "5432"))
    pg_user: str = os.getenv("PG_USER", "postgres")
    pg_password: str = os.getenv("PG_PASSWORD", "")
    pg_database: str = os.getenv("PG_DATABASE", "postgres")
    pg_sslmode: str = os.getenv("PG_SSLMODE", "disable")

    @property
    def pg_dsn(self) -> str:
        return (
            f"postgresql://{self.pg_user}:{self.pg_password}"
            f"@{self.pg_host}:{self.pg_port}/{self.pg_database}"
            f"?sslmode={self.pg_sslmode}"
        )

settings = Settings()
