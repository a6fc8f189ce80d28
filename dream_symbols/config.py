import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _load_env_files() -> None:
    # Precedence: explicit path > ~/.config/dreams.env > project .env
    explicit = os.getenv("DREAMS_ENV_FILE", "").strip()
    candidates = []
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.append(Path.home() / ".config" / "dreams.env")
    candidates.append(Path.cwd() / ".env")

    for path in candidates:
        if path.is_file():
            load_dotenv(path, override=False)


_load_env_files()

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


@dataclass(frozen=True)
class Settings:
    telegram_bot_token: str
    openai_api_key: str
    openai_model: str
    mongodb_uri: str
    mongodb_db: str
    default_timezone: str
    symbol_catalog_file: str | None
    daily_symbol_hour: int
    log_level: str


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {name}: expected integer value.") from exc


def _hour(name: str, default: int) -> int:
    value = _optional_int(name)
    if value is None:
        return default
    if not 0 <= value <= 23:
        raise ValueError(f"Invalid {name}: expected an hour between 0 and 23.")
    return value


def _log_level(name: str, default: str) -> str:
    level = os.getenv(name, "").strip().upper() or default
    if level not in logging.getLevelNamesMapping():
        raise ValueError(f"Invalid {name}: expected one of DEBUG, INFO, WARNING, ERROR, CRITICAL.")
    return level


def load_settings() -> Settings:
    token = os.getenv("TELEGRAM_BOT_TOKEN", "").strip()
    if not token:
        raise ValueError("Missing TELEGRAM_BOT_TOKEN")

    return Settings(
        telegram_bot_token=token,
        openai_api_key=os.getenv("OPENAI_API_KEY", "").strip(),
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4.1-mini").strip(),
        mongodb_uri=os.getenv("MONGODB_URI", "mongodb://localhost:27017").strip(),
        mongodb_db=os.getenv("MONGODB_DB", "dream_diary").strip(),
        default_timezone=os.getenv("DEFAULT_TIMEZONE", "UTC").strip() or "UTC",
        symbol_catalog_file=os.getenv("SYMBOL_CATALOG_FILE", "").strip() or None,
        daily_symbol_hour=_hour("DAILY_SYMBOL_HOUR", 8),
        log_level=_log_level("LOG_LEVEL", "INFO"),
    )


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every Telegram long-poll request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
