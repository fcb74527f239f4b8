"""Entrypoint for the Yonsei Mirae notice Discord notifier."""

from __future__ import annotations

import enum
import logging
import sys

from .config import Settings, get_settings
from .crawler import get_latest_notices
from .notifier import notify_new_notices
from .state import diff_new_notices, load_last_notice, save_last_notice, watermark_id

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)
LOGGER = logging.getLogger(__name__)


class RunStatus(enum.Enum):
    SUCCESS = "success"
    NO_NEW_NOTICES = "no_new_notices"
    FETCH_FAILED = "fetch_failed"
    PARTIAL_DELIVERY_FAILURE = "partial_delivery_failure"


EXIT_CODES = {
    RunStatus.SUCCESS: 0,
    RunStatus.NO_NEW_NOTICES: 0,
    RunStatus.FETCH_FAILED: 1,
    RunStatus.PARTIAL_DELIVERY_FAILURE: 2,
}


def run(settings: Settings) -> RunStatus:
    """Check the board once and forward every notice newer than the watermark."""
    LOGGER.info("새 공지 확인 중...")
    last_notice = load_last_notice(settings.state_path)
    last_id = str(watermark_id(last_notice))

    notices = get_latest_notices(
        settings.notice_list_url,
        last_id,
        site_origin=settings.site_origin,
        link_suffix=settings.link_suffix,
        timeout=settings.request_timeout,
    )
    if notices is None:
        LOGGER.error("공지사항 목록을 불러올 수 없음")
        return RunStatus.FETCH_FAILED

    if not notices:
        LOGGER.info("새 공지 없음")
        LOGGER.info(
            "마지막 공지: %s (ID: %s)",
            last_notice.title if last_notice else "없음",
            last_notice.id if last_notice else "없음",
        )
        return RunStatus.NO_NEW_NOTICES

    LOGGER.info(
        "최신 공지 ID: %s (이전 기록: %s)",
        notices[0].id,
        last_notice.id if last_notice else "없음",
    )

    new_notices = diff_new_notices(notices, last_notice)
    if not new_notices:
        LOGGER.info("새 공지 없음")
        return RunStatus.NO_NEW_NOTICES

    failed = notify_new_notices(
        settings.discord_webhook_url,
        new_notices,
        list_url=settings.notice_list_url,
        delay=settings.notify_delay_seconds,
        timeout=settings.request_timeout,
    )

    # 전송 실패와 무관하게 워터마크는 가장 최신 공지로 갱신
    save_last_notice(new_notices[0], path=settings.state_path)

    if failed:
        LOGGER.warning(
            "새 공지 %d개 중 %d개 전송 실패: %s",
            len(new_notices),
            len(failed),
            ", ".join(n.id for n in failed),
        )
        return RunStatus.PARTIAL_DELIVERY_FAILURE

    LOGGER.info("새 공지 %d개, 디스코드로 전송 완료", len(new_notices))
    return RunStatus.SUCCESS


def main() -> int:
    """Run the notifier workflow."""
    try:
        settings = get_settings()
    except ValueError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 1

    logging.getLogger().setLevel(settings.log_level)

    status = run(settings)
    return EXIT_CODES[status]


if __name__ == "__main__":
    sys.exit(main())
