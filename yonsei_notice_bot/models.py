"""Data models for the Yonsei Mirae notice crawler."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class NoticeInfo:
    """Display metadata shown under a board entry."""

    type_cl: str
    date: str
    date_last: str


@dataclass(frozen=True)
class Notice:
    """Represents a single notice entry on the university board."""

    id: str
    title: str
    link: str
    info: NoticeInfo

    @property
    def number(self) -> int:
        return int(self.id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "link": self.link,
            "info": {
                "typeCL": self.info.type_cl,
                "date": self.info.date,
                "dateLast": self.info.date_last,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Notice":
        """Build a notice from its persisted form, raising ValueError if malformed."""
        if not isinstance(data, dict):
            raise ValueError(f"Notice record must be an object, got {type(data).__name__}")

        try:
            notice_id = str(data["id"]).strip()
            title = str(data["title"])
            link = str(data["link"])
        except KeyError as exc:
            raise ValueError(f"Notice record is missing {exc.args[0]!r}") from exc

        if not notice_id.isdecimal():
            raise ValueError(f"Notice id is not numeric: {notice_id!r}")

        info = data.get("info") or {}
        if not isinstance(info, dict):
            raise ValueError("Notice info must be an object")

        return cls(
            id=notice_id,
            title=title,
            link=link,
            info=NoticeInfo(
                type_cl=str(info.get("typeCL", "")),
                date=str(info.get("date", "")),
                date_last=str(info.get("dateLast", "")),
            ),
        )
