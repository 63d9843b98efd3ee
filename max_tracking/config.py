import os
from dataclasses import dataclass
from datetime import tzinfo
from functools import lru_cache
from pathlib import Path

from dateutil import tz
from dotenv import load_dotenv

# Locate .env in the project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent
env_path = PROJECT_ROOT / '.env'
load_dotenv(dotenv_path=env_path)

REQUEST_LOG_BACKENDS = ("supabase", "ledger", "none")


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    supabase_url: str | None
    supabase_key: str | None
    request_log: str
    ledger_file: Path
    timezone: str
    debug: bool
    cors_allow_origins: tuple[str, ...]


def load_settings() -> Settings:
    request_log = (os.getenv("TRACKING_REQUEST_LOG") or "supabase").strip().lower()
    if request_log not in REQUEST_LOG_BACKENDS:
        raise RuntimeError(f"Unsupported TRACKING_REQUEST_LOG backend: {request_log}")

    ledger_file = Path(os.getenv("TRACKING_LEDGER_FILE") or PROJECT_ROOT / "tracking_ledger.csv")
    origins = os.getenv("CORS_ALLOW_ORIGINS") or "*"

    return Settings(
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_key=os.getenv("SUPABASE_KEY"),
        request_log=request_log,
        ledger_file=ledger_file,
        timezone=os.getenv("APP_TIMEZONE") or "Asia/Jakarta",
        debug=_flag(os.getenv("DEBUG_MODE")),
        cors_allow_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()


@lru_cache
def get_timezone() -> tzinfo:
    name = get_settings().timezone
    zone = tz.gettz(name)
    if zone is None:
        raise RuntimeError(f"Unknown APP_TIMEZONE: {name}")
    return zone
