import json

from yonsei_notice_bot.models import Notice, NoticeInfo
from yonsei_notice_bot.state import diff_new_notices, load_last_notice, save_last_notice


def make_notice(notice_id: str, title: str = "공지") -> Notice:
    return Notice(
        id=notice_id,
        title=title,
        link=f"https://mirae.yonsei.ac.kr/bbs/wj/1415/{notice_id}/artclView.do?layout=unknown",
        info=NoticeInfo(type_cl="학사", date="2025.03.01", date_last=""),
    )


def test_save_and_load_last_notice(tmp_path):
    path = tmp_path / "config" / "lastId.json"
    notice = make_notice("103", "수강신청 안내")

    save_last_notice(notice, path=path)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {
        "Notice": {
            "id": "103",
            "title": "수강신청 안내",
            "link": "https://mirae.yonsei.ac.kr/bbs/wj/1415/103/artclView.do?layout=unknown",
            "info": {"typeCL": "학사", "date": "2025.03.01", "dateLast": ""},
        }
    }

    assert load_last_notice(path) == notice


def test_save_last_notice_overwrites_previous_record(tmp_path):
    path = tmp_path / "lastId.json"

    save_last_notice(make_notice("101"), path=path)
    save_last_notice(make_notice("102"), path=path)

    assert load_last_notice(path).id == "102"


def test_load_last_notice_missing_file(tmp_path):
    assert load_last_notice(tmp_path / "nope.json") is None


def test_load_last_notice_invalid_json(tmp_path):
    path = tmp_path / "lastId.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_last_notice(path) is None


def test_load_last_notice_null_record(tmp_path):
    path = tmp_path / "lastId.json"
    path.write_text(json.dumps({"Notice": None}), encoding="utf-8")

    assert load_last_notice(path) is None


def test_load_last_notice_malformed_record(tmp_path):
    path = tmp_path / "lastId.json"
    path.write_text(json.dumps({"Notice": {"id": "abc", "title": "x", "link": "y"}}), encoding="utf-8")

    assert load_last_notice(path) is None

    path.write_text(json.dumps({"Notice": {"id": "10"}}), encoding="utf-8")

    assert load_last_notice(path) is None


def test_diff_new_notices_without_watermark_keeps_all():
    notices = [make_notice("103"), make_notice("102"), make_notice("101")]

    assert [n.id for n in diff_new_notices(notices, None)] == ["103", "102", "101"]


def test_diff_new_notices_filters_by_watermark():
    notices = [make_notice("103"), make_notice("102"), make_notice("101")]

    assert [n.id for n in diff_new_notices(notices, make_notice("102"))] == ["103"]


def test_diff_new_notices_nothing_newer():
    notices = [make_notice("103"), make_notice("102")]

    assert diff_new_notices(notices, make_notice("105")) == []
    assert diff_new_notices([], make_notice("105")) == []


def test_diff_new_notices_orders_newest_first():
    notices = [make_notice("103"), make_notice("104"), make_notice("101")]

    assert [n.id for n in diff_new_notices(notices, make_notice("102"))] == ["104", "103"]


def test_load_last_notice_non_utf8_file(tmp_path):
    path = tmp_path / "lastId.json"
    # cp949로 저장된 파일
    path.write_bytes(b'{"Notice": {"id": "\xb0\xf8\xc1\xf6"}}')

    assert load_last_notice(path) is None


def test_load_last_notice_unreadable_path(tmp_path):
    assert load_last_notice(tmp_path) is None


def test_load_last_notice_rejects_non_decimal_digits(tmp_path):
    path = tmp_path / "lastId.json"
    path.write_text(
        json.dumps({"Notice": {"id": "²", "title": "x", "link": "y"}}, ensure_ascii=False),
        encoding="utf-8",
    )

    assert load_last_notice(path) is None
