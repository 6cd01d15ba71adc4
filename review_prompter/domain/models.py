"""
Domain Models - Notice records and admin request context
=========================================================

Plain value types shared by the prompter and its collaborators.
No I/O lives here.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class DismissScope(Enum):
    """Who a dismissal applies to."""
    GLOBAL = "global"
    USER = "user"


class NoticeLevel(Enum):
    INFO = "info"
    WARNING = "warning"


@dataclass
class NoticeEntry:
    """One slug's entry in the persisted notices record."""
    time: Optional[int] = None
    dismissed: Optional[bool] = None

    @classmethod
    def from_record(cls, raw: Any) -> Optional["NoticeEntry"]:
        """Build from a stored value. Empty/absent values mean 'never seen'."""
        if not raw or not isinstance(raw, dict):
            return None
        return cls(time=raw.get("time"), dismissed=raw.get("dismissed"))

    def to_record(self) -> Dict[str, Any]:
        return {"time": self.time, "dismissed": self.dismissed}

    def is_due(self, now: int, grace_seconds: int) -> bool:
        """Not dismissed and the grace period since first sighting has elapsed."""
        if self.time is None or self.dismissed is None:
            return False
        return not self.dismissed and (self.time + grace_seconds) <= now


@dataclass(frozen=True)
class NoticeOptions:
    """Display options handed to the notice renderer with the notice body."""
    slug: str = ""
    dismiss: Optional[DismissScope] = None
    autop: bool = True
    css_class: str = ""


@dataclass(frozen=True)
class FooterLink:
    url: str
    text: str
    target: Optional[str] = None


@dataclass(frozen=True)
class AdminContext:
    """
    What the host knows about the current admin request.

    Stands in for the host's screen object, the `page` query parameter
    and the current user's capability check.
    """
    is_super_admin: bool = False
    screen_id: str = ""
    page: str = ""
    user_id: Optional[int] = None


@dataclass
class Notice:
    """A queued notice ready for display."""
    html: str
    level: NoticeLevel = NoticeLevel.INFO
    options: NoticeOptions = field(default_factory=NoticeOptions)
