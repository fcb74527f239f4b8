# state.py
"""마지막으로 알린 공지(워터마크)를 관리하는 모듈."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from .config import DEFAULT_STATE_PATH
from .models import Notice

LOGGER = logging.getLogger(__name__)

STATE_KEY = "Notice"


def load_last_notice(path: str | Path | None = None) -> Optional[Notice]:
    """lastId.json에서 마지막으로 알린 공지를 읽어옵니다. 실패하면 None."""
    state_path = Path(path) if path is not None else DEFAULT_STATE_PATH
    try:
        raw = state_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        LOGGER.info("%s 없음 -> 기록 없이 시작", state_path.name)
        return None
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.warning("%s 읽기 실패 -> 기록 없이 시작: %s", state_path.name, exc)
        return None

    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        LOGGER.warning("%s 파싱 실패 -> 기록 없이 시작", state_path.name)
        return None

    if not isinstance(data, dict):
        LOGGER.warning("%s 형식이 올바르지 않음 -> 기록 없이 시작", state_path.name)
        return None

    record = data.get(STATE_KEY)
    if record is None:
        return None

    try:
        return Notice.from_dict(record)
    except ValueError as exc:
        LOGGER.warning("저장된 공지 형식 오류 -> 기록 없이 시작: %s", exc)
        return None


def save_last_notice(notice: Notice, *, path: str | Path | None = None) -> None:
    """주어진 공지 하나로 lastId.json을 덮어씁니다. 쓰기 오류는 그대로 전파."""
    state_path = Path(path) if path is not None else DEFAULT_STATE_PATH
    state_path.parent.mkdir(parents=True, exist_ok=True)

    data = {STATE_KEY: notice.to_dict()}
    state_path.write_text(
        json.dumps(data, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    LOGGER.info("%s 저장 완료, 마지막 ID %s", state_path.name, notice.id)


def watermark_id(last_notice: Optional[Notice]) -> int:
    """기록이 없으면 0."""
    return last_notice.number if last_notice is not None else 0


def diff_new_notices(
    notices: Iterable[Notice],
    last_notice: Optional[Notice],
) -> List[Notice]:
    """공지 리스트에서 워터마크보다 번호가 큰 공지만 골라냅니다.

    Args:
        notices: 크롤링한 공지 리스트
        last_notice: 마지막으로 알린 공지 (없으면 None)

    Returns:
        새 공지 리스트 (ID 내림차순, 첫 번째가 최신)
    """
    threshold = watermark_id(last_notice)
    candidates = list(notices)

    new_list: List[Notice] = []
    for n in candidates:
        if n.number <= threshold:
            LOGGER.debug("공지 ID %s: 워터마크 %d 이하 -> 스킵", n.id, threshold)
            continue
        new_list.append(n)

    new_list.sort(key=lambda n: n.number, reverse=True)

    LOGGER.info(
        "전체 공지 %d개, 워터마크 %d, 새 공지 %d개",
        len(candidates),
        threshold,
        len(new_list),
    )
    return new_list
