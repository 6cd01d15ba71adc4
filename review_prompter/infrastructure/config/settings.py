"""
Settings Module - Centralized Configuration Management
=======================================================

ARCHITECTURAL DECISION:
- All configuration is loaded from environment variables (no hardcoded secrets)
- Settings are immutable dataclass for safety and clarity
- Single source of truth for plugin branding, review thresholds and links
"""

import os
import secrets
from dataclasses import dataclass, field
from pathlib import Path
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file if present (development convenience)
load_dotenv()

DAY_IN_SECONDS = 24 * 60 * 60

EDITIONS = ("lite", "pro")


@dataclass(frozen=True)
class PluginSettings:
    """Plugin identity: display name, slug namespace and edition."""

    name: str = field(default_factory=lambda: os.getenv("PLUGIN_NAME", "WPForms"))
    namespace: str = field(default_factory=lambda: os.getenv("PLUGIN_NAMESPACE", "wpforms"))
    edition: str = field(default_factory=lambda: os.getenv("PLUGIN_EDITION", "lite").strip().lower())
    locale: str = field(default_factory=lambda: os.getenv("PLUGIN_LOCALE", "en_US"))

    @property
    def is_pro(self) -> bool:
        return self.edition == "pro"

    def page(self, suffix: str) -> str:
        """Admin page slug, e.g. page("addons") -> "wpforms-addons"."""
        return f"{self.namespace}-{suffix}"

    def option(self, suffix: str) -> str:
        """Option name, e.g. option("activated") -> "wpforms_activated"."""
        return f"{self.namespace}_{suffix}"


@dataclass(frozen=True)
class ReviewSettings:
    """Review request thresholds."""

    review_url: str = field(
        default_factory=lambda: os.getenv(
            "REVIEW_URL",
            "https://wordpress.org/support/plugin/wpforms-lite/reviews/?filter=5#new-post"
        )
    )

    # Pro: minimum number of stored entries before asking
    entry_threshold: int = 50

    # Delay between first sighting of the notice and showing it
    notice_grace_seconds: int = DAY_IN_SECONDS

    # Lite: minimum time since activation before asking
    lite_grace_seconds: int = DAY_IN_SECONDS * 14


@dataclass(frozen=True)
class LinkSettings:
    """Footer promotion link targets."""

    support_url_pro: str = "https://wpforms.com/account/support/"
    support_url_lite: str = "https://wordpress.org/support/plugin/wpforms-lite/"
    docs_url: str = "https://wpforms.com/docs/"
    community_url: str = "https://www.facebook.com/groups/wpformsvip/"


@dataclass(frozen=True)
class Settings:
    """
    Root settings container - Single source of truth for all configuration.

    Usage:
        from review_prompter.infrastructure.config import get_settings
        settings = get_settings()
        print(settings.plugin.is_pro)
    """

    # Sub-settings groups
    plugin: PluginSettings = field(default_factory=PluginSettings)
    review: ReviewSettings = field(default_factory=ReviewSettings)
    links: LinkSettings = field(default_factory=LinkSettings)

    # File paths
    database_file: Path = field(
        default_factory=lambda: Path(os.getenv("DATABASE_FILE", "review_prompter.db"))
    )

    # Seeded administrator
    admin_username: str = field(default_factory=lambda: os.getenv("ADMIN_USERNAME", "admin"))
    admin_password: str = field(default_factory=lambda: os.getenv("ADMIN_PASSWORD", ""))

    # Signs the session cookie; a random secret logs everyone out on restart
    session_secret: str = field(
        default_factory=lambda: os.getenv("SESSION_SECRET") or secrets.token_hex(32)
    )

    def validate(self) -> list[str]:
        """
        Validate settings and return list of warnings/errors.
        Returns empty list if all settings are valid.
        """
        issues = []

        if self.plugin.edition not in EDITIONS:
            issues.append(
                f"WARNING: PLUGIN_EDITION={self.plugin.edition!r} is unknown. "
                "Treating it as the lite edition."
            )

        if not self.plugin.namespace:
            issues.append(
                "WARNING: PLUGIN_NAMESPACE is empty. "
                "Footer decoration will match every screen."
            )

        if not self.admin_password:
            issues.append(
                "WARNING: ADMIN_PASSWORD not set. "
                "No administrator will be seeded."
            )

        if not os.getenv("SESSION_SECRET"):
            issues.append(
                "WARNING: SESSION_SECRET not set. "
                "Using a random secret; sessions end when the server restarts."
            )

        return issues


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get singleton Settings instance.
    Cached to ensure consistent settings throughout application lifecycle.
    """
    return Settings()
