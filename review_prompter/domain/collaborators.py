"""
Collaborator Interfaces - What the prompter needs from its host
================================================================

The prompter never touches storage, HTML output or request globals directly.
Each concern is an abstract class here; infrastructure provides the real
implementations and tests provide in-memory fakes.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping

from .models import NoticeOptions


class SettingsStore(ABC):
    """Key-value option storage shared by the whole installation."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value, or `default` when absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store `value` under `key` (last write wins)."""
        ...


class NoticeRenderer(ABC):
    """Queues admin notices for display."""

    @abstractmethod
    def info(self, body: str, options: NoticeOptions) -> None:
        ...


class EntryCounter(ABC):
    """Counts stored form submissions. Only available in the pro edition."""

    @abstractmethod
    def count(self, limit: int = 0, total_only: bool = True) -> int:
        ...


class ContentTypeCounter(ABC):

    @abstractmethod
    def count_published(self, type_id: str) -> int:
        """Number of published items of a content type."""
        ...


class TemplateRenderer(ABC):

    @abstractmethod
    def render(self, name: str, data: Mapping[str, Any], return_string: bool = True) -> str:
        """Render a named template with `data`."""
        ...


class LinkBuilder(ABC):
    """Builds tracked outbound marketing links."""

    @abstractmethod
    def utm_link(self, url: str, medium: str, content: str = "", term: str = "") -> str:
        ...
