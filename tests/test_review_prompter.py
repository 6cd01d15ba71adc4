import pytest

from review_prompter.domain import AdminContext, DismissScope, REVIEW_LITE_SLUG, REVIEW_SLUG

from conftest import DAY, HOUR, NOW, FakeEntries

NOTICES = "wpforms_admin_notices"
ACTIVATED = "wpforms_activated"

ADMIN = AdminContext(is_super_admin=True, screen_id="toplevel_page_wpforms-overview", page="wpforms-overview")


def _seen(store, hours_ago=25, dismissed=False):
    store.data[NOTICES] = {REVIEW_SLUG: {"time": NOW - hours_ago * HOUR, "dismissed": dismissed}}


def _lite_ready(store, days_ago=15):
    _seen(store)
    store.data[ACTIVATED] = {"lite": NOW - days_ago * DAY}


# ── Guards ────────────────────────────────────────────────────────

@pytest.mark.parametrize("context,settings", [
    (AdminContext(is_super_admin=False, page="wpforms-overview"), {}),
    (ADMIN, {"hide-announcements": True}),
    (AdminContext(is_super_admin=True, page="wpforms-addons"), {}),
])
def test_guards_block_without_side_effects(store, notices, make_prompter, context, settings):
    if settings:
        store.data["wpforms_settings"] = settings
    _lite_ready(store)
    store.writes.clear()

    make_prompter().evaluate_review_eligibility(context)

    assert store.writes == []
    assert notices.shown == []


def test_guard_blocks_first_sighting_for_non_admin(store, notices, make_prompter):
    make_prompter().evaluate_review_eligibility(AdminContext(is_super_admin=False))

    assert NOTICES not in store.data
    assert notices.shown == []


# ── First sighting ────────────────────────────────────────────────

def test_first_check_records_time_and_shows_nothing(store, notices, make_prompter):
    make_prompter().evaluate_review_eligibility(ADMIN)

    assert store.data[NOTICES] == {REVIEW_SLUG: {"time": NOW, "dismissed": False}}
    assert notices.shown == []


def test_first_check_keeps_other_notice_slugs(store, make_prompter):
    store.data[NOTICES] = {"other": {"time": 1, "dismissed": True}}

    make_prompter().evaluate_review_eligibility(ADMIN)

    assert store.data[NOTICES]["other"] == {"time": 1, "dismissed": True}
    assert REVIEW_SLUG in store.data[NOTICES]


def test_existing_time_is_never_overwritten(store, make_prompter):
    _seen(store, hours_ago=2)
    store.writes.clear()

    make_prompter().evaluate_review_eligibility(ADMIN)

    assert store.data[NOTICES][REVIEW_SLUG]["time"] == NOW - 2 * HOUR
    assert store.writes == []


def test_not_shown_within_first_day(store, notices, make_prompter):
    _seen(store, hours_ago=23)
    store.data[ACTIVATED] = {"lite": NOW - 30 * DAY}

    make_prompter().evaluate_review_eligibility(ADMIN)

    assert notices.shown == []


def test_dismissed_is_never_shown(store, notices, make_prompter):
    _seen(store, hours_ago=24 * 365, dismissed=True)
    store.data[ACTIVATED] = {"lite": NOW - 400 * DAY}

    make_prompter().evaluate_review_eligibility(ADMIN)
    make_prompter(edition="pro", entries=FakeEntries(500)).evaluate_review_eligibility(ADMIN)

    assert notices.shown == []


def test_entry_missing_dismissed_flag_is_not_eligible(store, notices, make_prompter):
    store.data[NOTICES] = {REVIEW_SLUG: {"time": NOW - 3 * DAY}}
    store.data[ACTIVATED] = {"lite": NOW - 30 * DAY}

    make_prompter().evaluate_review_eligibility(ADMIN)

    assert notices.shown == []


# ── Pro edition ───────────────────────────────────────────────────

def test_pro_shows_notice_with_enough_entries(store, notices, templates, make_prompter):
    _seen(store)
    entries = FakeEntries(50)

    make_prompter(edition="pro", entries=entries).evaluate_review_eligibility(ADMIN)

    assert entries.calls == [(50, True)]
    assert len(notices.shown) == 1
    body, options = notices.shown[0]
    assert body == "<admin/review-request>"
    assert options.slug == REVIEW_SLUG
    assert options.dismiss is DismissScope.GLOBAL
    assert options.autop is False
    assert options.css_class == "wpforms-review-notice"
    assert templates.calls[0][0] == "admin/review-request"


def test_pro_skips_with_too_few_entries(store, notices, make_prompter):
    _seen(store)

    make_prompter(edition="pro", entries=FakeEntries(49)).evaluate_review_eligibility(ADMIN)

    assert notices.shown == []


def test_pro_without_entry_counter_uses_lite_path(store, notices, make_prompter):
    _lite_ready(store)

    make_prompter(edition="pro", entries=None).evaluate_review_eligibility(ADMIN)

    assert [options.slug for _, options in notices.shown] == [REVIEW_LITE_SLUG]


# ── Lite edition ──────────────────────────────────────────────────

def test_lite_first_check_records_activation(store, notices, make_prompter):
    _seen(store)

    make_prompter().evaluate_review_eligibility(ADMIN)

    assert store.data[ACTIVATED] == {"lite": NOW}
    assert notices.shown == []


def test_lite_shows_notice_after_two_weeks(store, notices, make_prompter):
    _lite_ready(store, days_ago=15)

    make_prompter(forms=1).evaluate_review_eligibility(ADMIN)

    assert len(notices.shown) == 1
    _, options = notices.shown[0]
    assert options.slug == REVIEW_LITE_SLUG
    assert options.css_class == "wpforms-review-notice"
    assert store.data[ACTIVATED] == {"lite": NOW - 15 * DAY}


def test_lite_waits_for_two_weeks(store, notices, make_prompter):
    _lite_ready(store, days_ago=13)

    make_prompter().evaluate_review_eligibility(ADMIN)

    assert notices.shown == []


def test_lite_requires_a_published_form(store, notices, make_prompter):
    _lite_ready(store)

    make_prompter(forms=0).evaluate_review_eligibility(ADMIN)

    assert notices.shown == []


def test_lite_yields_to_integration_notice(store, notices, make_prompter):
    _lite_ready(store)
    store.data["wpforms_constant_contact"] = True

    make_prompter().evaluate_review_eligibility(ADMIN)

    assert notices.shown == []


def test_lite_skips_entries_page(store, notices, make_prompter):
    _lite_ready(store)

    make_prompter().evaluate_review_eligibility(
        AdminContext(is_super_admin=True, screen_id="wpforms_page_wpforms-entries", page="wpforms-entries")
    )

    assert notices.shown == []


def test_lite_entries_page_does_not_record_activation(store, make_prompter):
    _seen(store)

    make_prompter().evaluate_review_eligibility(AdminContext(is_super_admin=True, page="wpforms-entries"))

    assert ACTIVATED not in store.data


# ── Boundaries ────────────────────────────────────────────────────

def test_due_exactly_one_day_after_first_sighting(store, notices, make_prompter):
    store.data[NOTICES] = {REVIEW_SLUG: {"time": NOW - DAY, "dismissed": False}}
    store.data[ACTIVATED] = {"lite": NOW - 30 * DAY}

    make_prompter().evaluate_review_eligibility(ADMIN)

    assert [options.slug for _, options in notices.shown] == [REVIEW_LITE_SLUG]


def test_one_second_short_of_a_day_is_not_due(store, notices, make_prompter):
    store.data[NOTICES] = {REVIEW_SLUG: {"time": NOW - DAY + 1, "dismissed": False}}
    store.data[ACTIVATED] = {"lite": NOW - 30 * DAY}

    make_prompter().evaluate_review_eligibility(ADMIN)

    assert notices.shown == []


def test_seen_this_second_is_not_due(store, notices, make_prompter):
    store.data[NOTICES] = {REVIEW_SLUG: {"time": NOW, "dismissed": False}}
    store.data[ACTIVATED] = {"lite": NOW - 30 * DAY}

    make_prompter().evaluate_review_eligibility(ADMIN)

    assert notices.shown == []


def test_lite_shows_exactly_fourteen_days_after_activation(store, notices, make_prompter):
    _lite_ready(store, days_ago=14)

    make_prompter().evaluate_review_eligibility(ADMIN)

    assert [options.slug for _, options in notices.shown] == [REVIEW_LITE_SLUG]


def test_lite_one_second_short_of_fourteen_days(store, notices, make_prompter):
    _seen(store)
    store.data[ACTIVATED] = {"lite": NOW - 14 * DAY + 1}

    make_prompter().evaluate_review_eligibility(ADMIN)

    assert notices.shown == []


def test_pro_with_no_entries(store, notices, make_prompter):
    _seen(store)

    make_prompter(edition="pro", entries=FakeEntries(0)).evaluate_review_eligibility(ADMIN)

    assert notices.shown == []


# ── Hooks ─────────────────────────────────────────────────────────

def test_register_hooks_wires_lifecycle_events(make_prompter):
    registered = []

    class Hooks:
        def add_action(self, name, callback, priority=10):
            registered.append(("action", name, priority))

        def add_filter(self, name, callback, priority=10):
            registered.append(("filter", name, priority))

    make_prompter().register_hooks(Hooks())

    assert registered == [
        ("action", "admin_init", 10),
        ("filter", "admin_footer_text", 1),
        ("action", "in_admin_footer", 10),
    ]
