"""Fetch and parse notices from the Yonsei Mirae notice board."""

from __future__ import annotations

import logging
from typing import List, Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup
from requests.exceptions import RequestException

from .config import DEFAULT_LINK_SUFFIX, DEFAULT_SITE_ORIGIN
from .models import Notice, NoticeInfo

LOGGER = logging.getLogger(__name__)

BOARD_ENTRY_SELECTOR = ".boardWrap > ul > li"
PINNED_CLASS = "board-noti"
DATE_LABEL = "작성일"
PERIOD_LABEL = "기간"


def fetch_html(url: str, *, timeout: Optional[float] = None) -> str:
    """Retrieve the HTML contents of the given URL."""
    headers = {
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/118.0.0.0 Safari/537.36"
        )
    }
    response = requests.get(url, headers=headers, timeout=timeout)
    response.raise_for_status()
    return response.text


def _select_text(entry, selector: str) -> str:
    """Concatenated text of every element matching the selector."""
    return "".join(tag.get_text() for tag in entry.select(selector)).strip()


def _first_text(entry, selector: str, label: str) -> str:
    tag = entry.select_one(selector)
    if tag is None:
        return ""
    return tag.get_text().replace(label, "", 1).strip()


def _is_pinned(entry) -> bool:
    return PINNED_CLASS in (entry.get("class") or [])


def _is_newer(notice_id: str, last_saved_id: int) -> bool:
    return notice_id.isdecimal() and int(notice_id) > last_saved_id


def _build_link(entry, site_origin: str, link_suffix: str) -> str:
    anchor = entry.find("a")
    href = (anchor.get("href") or "").strip() if anchor else ""
    return urljoin(site_origin, href) + link_suffix


def parse_notices(
    html: str,
    last_saved_id: str = "0",
    *,
    site_origin: str = DEFAULT_SITE_ORIGIN,
    link_suffix: str = DEFAULT_LINK_SUFFIX,
) -> List[Notice]:
    """Parse board entries newer than ``last_saved_id`` into Notice objects.

    Entries are returned in page order (newest first on this board). Pinned
    entries are always skipped. Every entry is scanned, so a regular entry that
    appears below an older one is still picked up.
    """
    soup = BeautifulSoup(html, "html.parser")
    threshold = int(last_saved_id) if str(last_saved_id).isdecimal() else 0

    entries = soup.select(BOARD_ENTRY_SELECTOR)
    if not entries:
        LOGGER.warning("No '%s' entries found in HTML.", BOARD_ENTRY_SELECTOR)
        return []

    notices: list[Notice] = []
    for li in entries:
        if _is_pinned(li):
            continue

        notice_id = _select_text(li, ".num span")
        if not _is_newer(notice_id, threshold):
            LOGGER.debug("Skipping known or non-numeric notice id: %r", notice_id)
            continue

        title = _select_text(li, ".title strong")
        if not title:
            LOGGER.warning("Title missing for notice %s, skipping", notice_id)
            continue

        # 기간 셀렉터(".date-area last")는 실제 마크업과 맞지 않아 보통 빈 문자열
        info = NoticeInfo(
            type_cl=_select_text(li, ".typeCL"),
            date=_first_text(li, ".date-area", DATE_LABEL),
            date_last=_first_text(li, ".date-area last", PERIOD_LABEL),
        )

        notices.append(
            Notice(
                id=notice_id,
                title=title,
                link=_build_link(li, site_origin, link_suffix),
                info=info,
            )
        )

    return notices


def get_latest_notices(
    list_url: str,
    last_saved_id: str = "0",
    *,
    site_origin: str = DEFAULT_SITE_ORIGIN,
    link_suffix: str = DEFAULT_LINK_SUFFIX,
    timeout: Optional[float] = None,
) -> Optional[List[Notice]]:
    """Fetch the board and return notices newer than ``last_saved_id``.

    Returns an empty list when nothing is new and None when the board could not
    be fetched or parsed.
    """
    try:
        html = fetch_html(list_url, timeout=timeout)
    except RequestException as exc:
        LOGGER.error("Failed to fetch notices: %s", exc)
        return None

    try:
        return parse_notices(
            html,
            last_saved_id,
            site_origin=site_origin,
            link_suffix=link_suffix,
        )
    except Exception as exc:  # noqa: BLE001
        LOGGER.error("Failed to parse notices: %s", exc)
        return None
