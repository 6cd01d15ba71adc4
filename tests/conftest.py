import pytest

from review_prompter.domain import (
    ContentTypeCounter,
    EntryCounter,
    LinkBuilder,
    NoticeRenderer,
    ReviewPrompter,
    SettingsStore,
    TemplateRenderer,
)
from review_prompter.infrastructure.config import LinkSettings, PluginSettings, ReviewSettings, Settings, get_settings

NOW = 1_700_000_000
HOUR = 60 * 60
DAY = 24 * HOUR


class MemoryStore(SettingsStore):
    def __init__(self, data=None):
        self.data = dict(data or {})
        self.writes = []

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, value):
        self.writes.append((key, value))
        self.data[key] = value


class RecordingNotices(NoticeRenderer):
    def __init__(self):
        self.shown = []

    def info(self, body, options):
        self.shown.append((body, options))


class RecordingTemplates(TemplateRenderer):
    def __init__(self):
        self.calls = []

    def render(self, name, data, return_string=True):
        self.calls.append((name, dict(data), return_string))
        return f"<{name}>"


class FakeLinks(LinkBuilder):
    def utm_link(self, url, medium, content="", term=""):
        return f"{url}?tracked={content}"


class FakeEntries(EntryCounter):
    def __init__(self, total):
        self.total = total
        self.calls = []

    def count(self, limit=0, total_only=True):
        self.calls.append((limit, total_only))
        return self.total


class FakeForms(ContentTypeCounter):
    def __init__(self, published=1):
        self.published = published

    def count_published(self, type_id):
        return self.published


def make_settings(edition="lite"):
    return Settings(
        plugin=PluginSettings(name="WPForms", namespace="wpforms", edition=edition, locale="en_US"),
        review=ReviewSettings(review_url="https://wordpress.org/support/plugin/wpforms-lite/reviews/?filter=5#new-post"),
        links=LinkSettings(),
    )


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def notices():
    return RecordingNotices()


@pytest.fixture
def templates():
    return RecordingTemplates()


@pytest.fixture
def make_prompter(store, notices, templates):
    def _make(edition="lite", entries=None, forms=1, now=NOW):
        return ReviewPrompter(
            store=store,
            notices=notices,
            templates=templates,
            links=FakeLinks(),
            forms=FakeForms(forms),
            settings=make_settings(edition),
            entries=entries,
            clock=lambda: now,
        )
    return _make


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
