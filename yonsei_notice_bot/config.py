"""Configuration handling for the notice bot."""

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


DEFAULT_NOTICE_LIST_URL = "https://mirae.yonsei.ac.kr/wj/1415/subview.do"
DEFAULT_SITE_ORIGIN = "https://mirae.yonsei.ac.kr"
DEFAULT_LINK_SUFFIX = "?layout=unknown"
DEFAULT_STATE_PATH = Path(__file__).resolve().parent.parent / "config" / "lastId.json"
DEFAULT_NOTIFY_DELAY_SECONDS = 1.5
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    discord_webhook_url: str
    notice_list_url: str = DEFAULT_NOTICE_LIST_URL
    site_origin: str = DEFAULT_SITE_ORIGIN
    link_suffix: str = DEFAULT_LINK_SUFFIX
    state_path: Path = DEFAULT_STATE_PATH
    notify_delay_seconds: float = DEFAULT_NOTIFY_DELAY_SECONDS
    request_timeout: Optional[float] = None
    log_level: str = DEFAULT_LOG_LEVEL


def _get_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number") from exc
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number")
    if value < 0:
        raise ValueError(f"{name} must not be negative")
    return value


def get_settings() -> Settings:
    """Load settings from environment variables, raising on missing webhook."""
    load_dotenv()

    webhook = os.getenv("DISCORD_WEBHOOK_URL")
    if not webhook or not webhook.strip():
        raise ValueError("DISCORD_WEBHOOK_URL is required")

    list_url = os.getenv("NOTICE_LIST_URL", DEFAULT_NOTICE_LIST_URL)
    site_origin = os.getenv("NOTICE_SITE_ORIGIN", DEFAULT_SITE_ORIGIN)
    # 접미사는 빈 문자열도 허용
    link_suffix = os.getenv("NOTICE_LINK_SUFFIX", DEFAULT_LINK_SUFFIX)

    state_raw = os.getenv("STATE_PATH")
    state_path = Path(state_raw.strip()) if state_raw and state_raw.strip() else DEFAULT_STATE_PATH

    delay = _get_float("NOTIFY_DELAY_SECONDS", DEFAULT_NOTIFY_DELAY_SECONDS)
    timeout = _get_float("REQUEST_TIMEOUT", None)

    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
    if log_level not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

    return Settings(
        discord_webhook_url=webhook.strip(),
        notice_list_url=list_url.strip(),
        site_origin=site_origin.strip().rstrip("/"),
        link_suffix=link_suffix.strip(),
        state_path=state_path,
        notify_delay_seconds=delay,
        request_timeout=timeout,
        log_level=log_level,
    )
