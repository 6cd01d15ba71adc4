"""
Admin Notices - Queueing, Rendering and Dismissal
==================================================

The host side of dismissible notices:
- NoticeQueue collects notices raised during one admin request and renders
  them at the top of the page
- NoticeDismissal records a dismissal when the user clicks a dismiss link

Dismissals live in the same notices record the review prompter reads, so
a dismissed slug moves to its terminal state for every later request.

USAGE:
    queue = NoticeQueue(store, notices_option="wpforms_admin_notices")
    queue.info("<p>Hello</p>", NoticeOptions(slug="hello", dismiss=DismissScope.GLOBAL))
    html = queue.render()
"""

import html
import time
import logging
from typing import Any, Callable, Dict, List, Optional

from ...domain.collaborators import NoticeRenderer, SettingsStore
from ...domain.models import DismissScope, Notice, NoticeEntry, NoticeLevel, NoticeOptions

logger = logging.getLogger(__name__)


def user_notices_option(notices_option: str, user_id: int) -> str:
    """Per-user dismissal record name."""
    return f"{notices_option}_user_{user_id}"


def _load(store: SettingsStore, key: str) -> Dict[str, Any]:
    record = store.get(key, {})
    return dict(record) if isinstance(record, dict) else {}


class NoticeQueue(NoticeRenderer):
    """Request-scoped list of notices waiting to be displayed."""

    def __init__(self, store: SettingsStore, notices_option: str, user_id: Optional[int] = None):
        self._store = store
        self._option = notices_option
        self._user_id = user_id
        self._notices: List[Notice] = []

    def __len__(self) -> int:
        return len(self._notices)

    def info(self, body: str, options: NoticeOptions) -> None:
        self.add(body, NoticeLevel.INFO, options)

    def warning(self, body: str, options: NoticeOptions) -> None:
        self.add(body, NoticeLevel.WARNING, options)

    def add(self, body: str, level: NoticeLevel, options: NoticeOptions) -> None:
        if options.dismiss is not None and self.is_dismissed(options.slug, options.dismiss):
            logger.debug(f"Notice '{options.slug}' already dismissed, skipping")
            return
        self._notices.append(Notice(html=body, level=level, options=options))

    def is_dismissed(self, slug: str, scope: DismissScope) -> bool:
        if not slug:
            return False

        if scope is DismissScope.USER:
            if self._user_id is None:
                return False
            key = user_notices_option(self._option, self._user_id)
        else:
            key = self._option

        entry = NoticeEntry.from_record(_load(self._store, key).get(slug))
        return bool(entry and entry.dismissed)

    def render(self) -> str:
        return "\n".join(self._render_one(notice) for notice in self._notices)

    def _render_one(self, notice: Notice) -> str:
        options = notice.options
        classes = ["notice", f"notice-{notice.level.value}"]
        if options.dismiss is not None:
            classes.append("is-dismissible")
        if options.css_class:
            classes.append(options.css_class)

        body = f"<p>{notice.html}</p>" if options.autop else notice.html
        attrs = f'class="{html.escape(" ".join(classes))}"'
        if options.slug:
            attrs += f' data-notice-slug="{html.escape(options.slug)}"'
        if options.dismiss is not None:
            attrs += f' data-dismiss="{options.dismiss.value}"'

        return f"<div {attrs}>{body}</div>"


class NoticeDismissal:
    """Marks notices as dismissed in the persisted notices record."""

    def __init__(self, store: SettingsStore, notices_option: str, clock: Callable[[], int] = lambda: int(time.time())):
        self._store = store
        self._option = notices_option
        self._clock = clock

    def dismiss(self, slug: str, scope: DismissScope = DismissScope.GLOBAL, user_id: Optional[int] = None) -> bool:
        """Record the dismissal. Returns False when the request can't be honoured."""
        if not slug:
            return False

        if scope is DismissScope.USER:
            if user_id is None:
                return False
            key = user_notices_option(self._option, user_id)
        else:
            key = self._option

        record = _load(self._store, key)
        record[slug] = NoticeEntry(time=self._clock(), dismissed=True).to_record()
        self._store.set(key, record)

        logger.info(f"Notice '{slug}' dismissed ({scope.value})")
        return True
