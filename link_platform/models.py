"""
Domain model for Link Platform.

A single entity, `Link`, flows between storage backends, the manager and
the API. It is immutable: every mutation in a backend produces a new
instance via `dataclasses.replace`.

Wire format (`to_dict`):
    {
        "code": "mylink1",
        "targetUrl": "https://example.com",
        "totalClicks": 0,
        "lastClicked": null,
        "createdAt": "2026-01-01T12:00:00+00:00",
        "updatedAt": "2026-01-01T12:00:00+00:00"
    }
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def utcnow() -> datetime:
    """Timezone-aware current UTC time (single clock for all backends)."""
    return datetime.now(timezone.utc)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class Link:
    code: str
    target_url: str
    total_clicks: int = 0
    last_clicked: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def new(cls, code: str, target_url: str, now: Optional[datetime] = None) -> "Link":
        """Build a freshly created link: zero clicks, never clicked."""
        ts = now or utcnow()
        return cls(code=code, target_url=target_url, created_at=ts, updated_at=ts)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Link":
        """
        Build a Link from a database row (dict_row) using snake_case columns.

        Example:
            >>> Link.from_row({"code": "abc123", "target_url": "https://x.com",
            ...                "total_clicks": 2, "last_clicked": None,
            ...                "created_at": None, "updated_at": None}).total_clicks
            2
        """
        return cls(
            code=row["code"],
            target_url=row["target_url"],
            total_clicks=int(row.get("total_clicks") or 0),
            last_clicked=row.get("last_clicked"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase record exposed over HTTP."""
        return {
            "code": self.code,
            "targetUrl": self.target_url,
            "totalClicks": self.total_clicks,
            "lastClicked": _iso(self.last_clicked),
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }
