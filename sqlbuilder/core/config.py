import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from sqlbuilder.core.exceptions import ConfigurationError

load_dotenv()

DEFAULT_API_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_ANTHROPIC_VERSION = "2023-06-01"


@dataclass(frozen=True)
class Settings:
    store_path: Path
    api_url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    max_tokens: int = 1024
    anthropic_version: str = DEFAULT_ANTHROPIC_VERSION
    export_dir: Path = Path(".")
    log_level: str = "INFO"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer", {"value": raw})


def get_settings() -> Settings:
    """
    Читает настройки из окружения (.env подхватывается при импорте модуля).
    Все ключи необязательные.
    """
    store = os.getenv("STORE_PATH") or str(Path.home() / ".sqlbuilder" / "store.db")
    return Settings(
        store_path=Path(store).expanduser(),
        api_url=os.getenv("CLAUDE_API_URL") or DEFAULT_API_URL,
        model=os.getenv("CLAUDE_MODEL") or DEFAULT_MODEL,
        max_tokens=_int_env("CLAUDE_MAX_TOKENS", 1024),
        anthropic_version=os.getenv("ANTHROPIC_VERSION") or DEFAULT_ANTHROPIC_VERSION,
        export_dir=Path(os.getenv("EXPORT_DIR") or ".").expanduser(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
