# yonsei_notice_bot/notifier.py

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Iterable, List, Optional

import requests
from requests.exceptions import RequestException

from .config import DEFAULT_NOTICE_LIST_URL, DEFAULT_NOTIFY_DELAY_SECONDS
from .models import Notice

LOGGER = logging.getLogger(__name__)

EMBED_TITLE = "📢 연세대학교 미래캠퍼스 새 공지사항"
EMBED_COLOR = 0x003399  # 연세 블루
FOOTER_TEXT = "Yonsei Mirae Notice Bot"


def _build_description(notice: Notice) -> str:
    return (
        f"### [{notice.title}]({notice.link})\n\n"
        "새로운 학사 공지가 등록되었습니다. 아래 정보를 확인하세요."
    )


def _build_fields(notice: Notice, list_url: str) -> list:
    return [
        {"name": "📅 작성일", "value": f"`{notice.info.date}`", "inline": True},
        {"name": "🆔 글 번호", "value": f"`{notice.id}`", "inline": True},
        {
            "name": "🔗 바로가기",
            # 상세 페이지와 전체 목록을 한 칸에
            "value": f"[📄 상세 보기]({notice.link})  |  [📋 전체 목록]({list_url})",
            "inline": False,
        },
    ]


def build_embed(
    notice: Notice,
    *,
    list_url: str = DEFAULT_NOTICE_LIST_URL,
    now: Optional[datetime] = None,
) -> dict:
    """공지 정보를 디스코드 임베드 형태로 변환."""
    timestamp = now or datetime.now(timezone.utc)
    return {
        "title": EMBED_TITLE,
        "description": _build_description(notice),
        "color": EMBED_COLOR,
        "fields": _build_fields(notice, list_url),
        "footer": {"text": FOOTER_TEXT},
        "timestamp": timestamp.isoformat(),
    }


def send_discord_message(
    webhook_url: str,
    notice: Notice,
    *,
    list_url: str = DEFAULT_NOTICE_LIST_URL,
    timeout: Optional[float] = None,
) -> None:
    """단일 공지를 디스코드 웹훅으로 전송. 실패하면 예외."""
    payload = {
        "allowed_mentions": {"parse": []},  # 멘션 방지
        "embeds": [build_embed(notice, list_url=list_url)],
    }

    resp = requests.post(webhook_url, json=payload, timeout=timeout)
    resp.raise_for_status()
    LOGGER.info("디스코드 전송 완료: %s (%s)", notice.id, notice.title)


def notify_new_notices(
    webhook_url: str,
    notices: Iterable[Notice],
    *,
    list_url: str = DEFAULT_NOTICE_LIST_URL,
    delay: float = DEFAULT_NOTIFY_DELAY_SECONDS,
    timeout: Optional[float] = None,
) -> List[Notice]:
    """새 공지들을 순서대로 디스코드로 전송하고, 전송에 실패한 공지를 돌려줌."""
    failed: List[Notice] = []
    for index, notice in enumerate(notices):
        if index and delay > 0:
            time.sleep(delay)  # 웹훅을 연달아 두드리지 않도록

        LOGGER.info("새 공지: %s (ID: %s)", notice.title, notice.id)
        try:
            send_discord_message(webhook_url, notice, list_url=list_url, timeout=timeout)
        except RequestException as exc:
            LOGGER.error("디스코드 전송 실패: %s (%s)", notice.id, exc)
            failed.append(notice)

    return failed
