from .settings import (
    DAY_IN_SECONDS,
    LinkSettings,
    PluginSettings,
    ReviewSettings,
    Settings,
    get_settings,
)

__all__ = [
    "DAY_IN_SECONDS",
    "LinkSettings",
    "PluginSettings",
    "ReviewSettings",
    "Settings",
    "get_settings",
]
