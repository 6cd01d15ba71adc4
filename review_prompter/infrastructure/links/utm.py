"""
Tracked Links - UTM parameters for outbound marketing URLs
===========================================================

Campaign name depends on the edition so lite and pro traffic can be told
apart: "plugin" for pro, "liteplugin" for lite.
"""

import re
from urllib.parse import urlencode, urlsplit, urlunsplit

from ...domain.collaborators import LinkBuilder


def _sanitize_key(value: str) -> str:
    """Lowercase and keep only [a-z0-9_-]."""
    return re.sub(r"[^a-z0-9_\-]", "", value.lower())


class UtmLinkBuilder(LinkBuilder):
    """
    USAGE:
        builder = UtmLinkBuilder(is_pro=False, locale="en_US")
        builder.utm_link("https://wpforms.com/docs/", "Plugin Footer", "Plugin Documentation")
    """

    SOURCE = "WordPress"

    def __init__(self, is_pro: bool = False, locale: str = "en_US"):
        self.is_pro = is_pro
        self.locale = locale

    @property
    def campaign(self) -> str:
        return "plugin" if self.is_pro else "liteplugin"

    def utm_link(self, url: str, medium: str, content: str = "", term: str = "") -> str:
        params = {
            "utm_campaign": self.campaign,
            "utm_source": self.SOURCE,
            "utm_medium": medium,
        }
        if content:
            params["utm_content"] = content
        if term:
            params["utm_term"] = term
        params["utm_locale"] = _sanitize_key(self.locale)

        scheme, netloc, path, query, fragment = urlsplit(url)
        encoded = urlencode(params)
        query = f"{query}&{encoded}" if query else encoded

        return urlunsplit((scheme, netloc, path, query, fragment))
