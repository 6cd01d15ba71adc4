# Domain Layer
# ============
# Review prompting rules and the interfaces they depend on.
# Nothing here performs I/O; collaborators are injected by the host.

from .collaborators import (
    ContentTypeCounter,
    EntryCounter,
    LinkBuilder,
    NoticeRenderer,
    SettingsStore,
    TemplateRenderer,
)
from .models import AdminContext, DismissScope, FooterLink, Notice, NoticeEntry, NoticeLevel, NoticeOptions
from .review_prompter import REVIEW_LITE_SLUG, REVIEW_SLUG, ReviewPrompter

__all__ = [
    "AdminContext",
    "ContentTypeCounter",
    "DismissScope",
    "EntryCounter",
    "FooterLink",
    "LinkBuilder",
    "Notice",
    "NoticeEntry",
    "NoticeLevel",
    "NoticeOptions",
    "NoticeRenderer",
    "REVIEW_LITE_SLUG",
    "REVIEW_SLUG",
    "ReviewPrompter",
    "SettingsStore",
    "TemplateRenderer",
]
