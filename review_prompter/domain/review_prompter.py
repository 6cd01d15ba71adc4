"""
Review Prompter - Ask administrators for a review, promote in footers
======================================================================

Decides on every admin page load whether to queue a "please review us"
notice, and decorates plugin admin pages with footer text and links.

RESPONSIBILITIES:
- Track when each review notice was first considered (grace period)
- Apply edition-specific engagement checks before asking
- Build footer rating text and the pre-footer promotion link list

Everything external (storage, notices, templates, links, counters) is
injected, so the host decides how each concern is implemented.

USAGE:
    prompter = ReviewPrompter(store, notices, templates, links, forms, settings)
    prompter.register_hooks(hooks)
    hooks.do_action("admin_init", context)
"""

import time
import logging
from typing import Any, Callable, Dict, List, Optional

from .collaborators import (
    ContentTypeCounter,
    EntryCounter,
    LinkBuilder,
    NoticeRenderer,
    SettingsStore,
    TemplateRenderer,
)
from .models import AdminContext, DismissScope, FooterLink, NoticeEntry, NoticeOptions

logger = logging.getLogger(__name__)

REVIEW_SLUG = "review_request"
REVIEW_LITE_SLUG = "review_lite_request"

# Pages the pre-footer promotion is shown on. Add-ons from other vendors may
# use the same prefix, so the list is exact rather than prefix-based.
PROMOTION_PAGES = (
    "about",
    "addons",
    "analytics",
    "community",
    "entries",
    "overview",
    "payments",
    "settings",
    "smtp",
    "templates",
    "tools",
)

FOOTER_MEDIUM = "Plugin Footer"


def _now() -> int:
    return int(time.time())


class ReviewPrompter:
    """
    Review request notices and footer promotion for plugin admin pages.

    All three public operations are safe to call on every request: each
    one either does its job or returns without side effects.
    """

    def __init__(
        self,
        store: SettingsStore,
        notices: NoticeRenderer,
        templates: TemplateRenderer,
        links: LinkBuilder,
        forms: ContentTypeCounter,
        settings,
        entries: Optional[EntryCounter] = None,
        clock: Callable[[], int] = _now,
    ):
        self.store = store
        self.notices = notices
        self.templates = templates
        self.links = links
        self.forms = forms
        self.entries = entries
        self.settings = settings
        self.plugin = settings.plugin
        self.clock = clock

    def register_hooks(self, hooks) -> None:
        """Attach to the host's lifecycle events."""
        hooks.add_action("admin_init", self.evaluate_review_eligibility)
        hooks.add_filter("admin_footer_text", self.decorate_footer_text, priority=1)
        hooks.add_action("in_admin_footer", self.render_footer_promotion)

    # ── Review request ─────────────────────────────────────────────

    @property
    def notices_option(self) -> str:
        return self.plugin.option("admin_notices")

    @property
    def activated_option(self) -> str:
        return self.plugin.option("activated")

    def evaluate_review_eligibility(self, context: AdminContext) -> None:
        """Add admin notices as needed for reviews."""
        if (
            not context.is_super_admin
            or self._announcements_hidden()
            or context.page == self.plugin.page("addons")
        ):
            return

        notices = self._load_record(self.notices_option)
        now = self.clock()

        entry = NoticeEntry.from_record(notices.get(REVIEW_SLUG))
        if entry is None:
            notices[REVIEW_SLUG] = NoticeEntry(time=now, dismissed=False).to_record()
            self.store.set(self.notices_option, notices)
            logger.info(f"Review request first seen at {now}, grace period started")
            return

        if not entry.is_due(now, self.settings.review.notice_grace_seconds):
            logger.debug("Review request not due yet or dismissed")
            return

        if self.plugin.is_pro and self.entries is not None:
            self.show_full_edition_prompt()
        else:
            self.show_lite_edition_prompt(context)

    def show_full_edition_prompt(self) -> None:
        """Ask for a review once the site has collected enough entries."""
        threshold = self.settings.review.entry_threshold
        total = self.entries.count(limit=threshold, total_only=True) if self.entries else 0

        if not total or total < threshold:
            logger.debug(f"Only {total} entries stored, need {threshold}")
            return

        self._show_review_notice(REVIEW_SLUG)

    def show_lite_edition_prompt(self, context: AdminContext) -> None:
        """Ask for a review once the lite edition has been in use for a while."""
        if context.page == self.plugin.page("entries"):
            return

        activated = self._load_record(self.activated_option)
        now = self.clock()

        if not activated.get("lite"):
            activated["lite"] = now
            self.store.set(self.activated_option, activated)
            logger.info(f"Lite activation recorded at {now}")
            return

        if activated["lite"] + self.settings.review.lite_grace_seconds > now:
            return

        # At least one form must exist.
        if not self.forms.count_published(self.plugin.namespace):
            return

        # Another integration notice is competing for attention.
        if self.store.get(self.plugin.option("constant_contact"), False):
            logger.debug("Integration notice active, holding the review request")
            return

        self._show_review_notice(REVIEW_LITE_SLUG)

    def review_content(self) -> str:
        return self.templates.render(
            "admin/review-request",
            {
                "plugin_name": self.plugin.name,
                "namespace": self.plugin.namespace,
                "review_url": self.settings.review.review_url,
            },
            True,
        )

    def _show_review_notice(self, slug: str) -> None:
        self.notices.info(
            self.review_content(),
            NoticeOptions(
                slug=slug,
                dismiss=DismissScope.GLOBAL,
                autop=False,
                css_class=f"{self.plugin.namespace}-review-notice",
            ),
        )
        logger.info(f"Review notice '{slug}' queued")

    def _announcements_hidden(self) -> bool:
        plugin_settings = self.store.get(self.plugin.option("settings"), {})
        if not isinstance(plugin_settings, dict):
            return False
        return bool(plugin_settings.get("hide-announcements"))

    def _load_record(self, key: str) -> Dict[str, Any]:
        record = self.store.get(key, {})
        return dict(record) if isinstance(record, dict) else {}

    # ── Footer ─────────────────────────────────────────────────────

    def decorate_footer_text(self, text: str, context: AdminContext) -> str:
        """On plugin screens, replace the footer text with a rating request."""
        if not context.screen_id or self.plugin.namespace not in context.screen_id:
            return text

        return self.templates.render(
            "admin/footer-rating",
            {
                "plugin_name": self.plugin.name,
                "review_url": self.settings.review.review_url,
            },
            True,
        )

    def footer_links(self) -> List[FooterLink]:
        links_cfg = self.settings.links

        if self.plugin.is_pro:
            support_url = self.links.utm_link(links_cfg.support_url_pro, FOOTER_MEDIUM, "Contact Support")
        else:
            support_url = links_cfg.support_url_lite

        return [
            FooterLink(url=support_url, text="Support", target="_blank"),
            FooterLink(
                url=self.links.utm_link(links_cfg.docs_url, FOOTER_MEDIUM, "Plugin Documentation"),
                text="Docs",
                target="_blank",
            ),
            FooterLink(url=links_cfg.community_url, text="VIP Circle", target="_blank"),
            FooterLink(url=f"admin.php?page={self.plugin.page('about')}", text="Free Plugins"),
        ]

    def render_footer_promotion(self, context: AdminContext) -> Optional[str]:
        """Pre-footer promotion block for the plugin's own admin pages."""
        plugin_pages = {self.plugin.page(suffix) for suffix in PROMOTION_PAGES}

        if context.page not in plugin_pages:
            return None

        return self.templates.render(
            "admin/promotion",
            {
                "title": f"Made with ♥ by the {self.plugin.name} Team",
                "links": self.footer_links(),
            },
            True,
        )
