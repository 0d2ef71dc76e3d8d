import random
import threading
from datetime import timedelta
from unittest.mock import patch

import pytest
from django.db import DatabaseError, connection
from django.utils import timezone

from apps.core.enums import ViewerType, ViewRejection
from apps.statistics.exceptions import ListingNotFound, PersistenceError
from apps.statistics.models import ListingStats, ListingViewer, ListingView
from apps.statistics.services import record_view, increment_lifetime_views
from apps.users.models import User

pytestmark = pytest.mark.django_db


def stats_of(listing):
    return ListingStats.objects.get(pk=listing.pk)


def test_new_listing_starts_with_zero_counters(listing):
    stats = stats_of(listing)
    assert (stats.view_count, stats.unique_view_count, stats.last_viewed_at) == (0, 0, None)


def test_account_first_view_is_unique_repeat_is_not(listing, viewer):
    first = record_view(listing.pk, user=viewer)
    assert first.accepted and first.is_unique_view and not first.is_owner_view
    assert (first.view_count, first.unique_view_count) == (1, 1)
    assert first.viewer_type == ViewerType.ACCOUNT

    second = record_view(listing.pk, user=viewer)
    assert second.accepted and not second.is_unique_view
    assert (second.view_count, second.unique_view_count) == (2, 1)

    row = ListingViewer.objects.get(listing=listing)
    assert row.viewer_key == f"user:{viewer.pk}"
    assert row.views_count == 2


def test_anonymous_views_are_deduplicated_by_session(listing):
    first = record_view(listing.pk, session_id="sess-a")
    again = record_view(listing.pk, session_id="sess-a")
    other = record_view(listing.pk, session_id="sess-b")

    assert first.is_unique_view and not again.is_unique_view and other.is_unique_view
    assert first.viewer_type == ViewerType.ANONYMOUS
    stats = stats_of(listing)
    assert (stats.view_count, stats.unique_view_count) == (3, 2)
    assert ListingViewer.objects.filter(listing=listing, viewer_type=ViewerType.ANONYMOUS).count() == 2


def test_account_wins_over_session_id(listing, viewer):
    record = record_view(listing.pk, user=viewer, session_id="ignored")
    assert record.viewer_type == ViewerType.ACCOUNT
    assert not ListingViewer.objects.filter(viewer_key="session:ignored").exists()


def test_viewer_is_required(listing):
    with pytest.raises(ValueError):
        record_view(listing.pk)


def test_owner_second_view_within_hour_is_rate_limited(listing, owner):
    now = timezone.now()
    first = record_view(listing.pk, user=owner, now=now)
    assert first.accepted and first.is_owner_view and first.is_unique_view

    second = record_view(listing.pk, user=owner, now=now + timedelta(minutes=20))
    assert not second.accepted
    assert second.is_owner_view
    assert second.reason == ViewRejection.RATE_LIMITED
    assert second.detail == "Owner view rate limited (1 view per hour)"
    assert (second.view_count, second.unique_view_count) == (1, 1)

    stats = stats_of(listing)
    assert (stats.view_count, stats.unique_view_count, stats.last_viewed_at) == (1, 1, now)
    assert stats.owner_view_count == 1
    assert ListingView.objects.filter(listing=listing).count() == 1


def test_owner_view_accepted_after_cooldown(listing, owner):
    now = timezone.now()
    record_view(listing.pk, user=owner, now=now)
    later = record_view(listing.pk, user=owner, now=now + timedelta(minutes=61))
    assert later.accepted and not later.is_unique_view
    assert later.view_count == 2
    assert ListingView.objects.filter(listing=listing, viewer_type=ViewerType.OWNER).count() == 2


def test_owner_cooldown_follows_listing_last_view(listing, owner, viewer):
    now = timezone.now()
    record_view(listing.pk, user=viewer, now=now)
    record = record_view(listing.pk, user=owner, now=now + timedelta(minutes=5))
    assert record.reason == ViewRejection.RATE_LIMITED


def test_repeat_browsing_is_allowed_until_threshold_then_blocked(listing, viewer):
    start = timezone.now()
    records = [record_view(listing.pk, user=viewer, now=start + timedelta(minutes=i)) for i in range(7)]

    assert all(r.accepted for r in records[:6])
    blocked = records[6]
    assert not blocked.accepted
    assert blocked.reason == ViewRejection.ABUSIVE
    assert (blocked.view_count, blocked.unique_view_count) == (6, 1)

    stats = stats_of(listing)
    assert stats.view_count == 6
    assert stats.excessive_views == 1
    assert stats.flagged_at is not None
    assert stats.flag_reason == "Excessive viewing detected"


def test_abuse_window_restarts(listing, viewer):
    start = timezone.now()
    for i in range(6):
        record_view(listing.pk, user=viewer, now=start + timedelta(minutes=i))
    assert not record_view(listing.pk, user=viewer, now=start + timedelta(hours=1)).accepted

    next_day = record_view(listing.pk, user=viewer, now=start + timedelta(hours=25))
    assert next_day.accepted
    row = ListingViewer.objects.get(listing=listing)
    assert (row.views_count, row.window_views) == (7, 1)


def test_anonymous_repeat_views_are_not_throttled(listing):
    records = [record_view(listing.pk, session_id="same") for _ in range(10)]
    assert all(r.accepted for r in records)
    assert stats_of(listing).view_count == 10


def test_missing_and_deleted_listing_not_found(listing, viewer):
    with pytest.raises(ListingNotFound):
        record_view(listing.pk + 1000, user=viewer)

    listing.soft_delete()
    with pytest.raises(ListingNotFound):
        record_view(listing.pk, user=viewer)


def test_counters_hold_invariants_for_any_sequence(make_listing, owner, make_user):
    listing = make_listing(owner=owner)
    accounts = [make_user() for _ in range(4)] + [owner]
    sessions = ["s1", "s2", "s3"]
    rnd = random.Random(7)
    now = timezone.now()

    for step in range(80):
        now += timedelta(minutes=rnd.choice([1, 5, 30, 90]))
        if rnd.random() < 0.6:
            record = record_view(listing.pk, user=rnd.choice(accounts), now=now)
        else:
            record = record_view(listing.pk, session_id=rnd.choice(sessions), now=now)

        stats = stats_of(listing)
        viewers = ListingViewer.objects.filter(listing=listing)
        assert stats.unique_view_count <= stats.view_count
        assert stats.unique_view_count == viewers.count()
        assert stats.view_count == ListingView.objects.filter(listing=listing).count()
        assert (record.view_count, record.unique_view_count) == (stats.view_count, stats.unique_view_count)


def test_accepted_view_increments_owner_lifetime_views(listing, owner, viewer, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        record_view(listing.pk, user=viewer)
    assert len(callbacks) == 1
    owner.refresh_from_db()
    assert owner.total_views == 1


def test_rejected_view_leaves_owner_lifetime_views(listing, owner, django_capture_on_commit_callbacks):
    now = timezone.now()
    record_view(listing.pk, user=owner, now=now)
    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        record = record_view(listing.pk, user=owner, now=now + timedelta(minutes=1))
    assert not record.accepted
    assert callbacks == []


def test_listing_without_owner_has_no_side_effect(make_listing, viewer, django_capture_on_commit_callbacks):
    orphan = make_listing(owner=None)
    with django_capture_on_commit_callbacks() as callbacks:
        record = record_view(orphan.pk, user=viewer)
    assert record.accepted and not record.is_owner_view
    assert callbacks == []


def test_owner_counter_failure_does_not_fail_the_view(listing, owner, viewer, django_capture_on_commit_callbacks):
    with patch.object(User.objects, "filter", side_effect=DatabaseError("users table locked")):
        with django_capture_on_commit_callbacks(execute=True):
            record = record_view(listing.pk, user=viewer)

    assert record.accepted
    assert stats_of(listing).view_count == 1
    owner.refresh_from_db()
    assert owner.total_views == 0


def test_increment_lifetime_views_reports_outcome(owner):
    assert increment_lifetime_views(owner.pk) is True
    assert increment_lifetime_views(owner.pk + 1000) is False
    with patch.object(User.objects, "filter", side_effect=DatabaseError("down")):
        assert increment_lifetime_views(owner.pk) is False
    owner.refresh_from_db()
    assert owner.total_views == 1


def test_storage_failure_is_a_persistence_error(listing, viewer):
    with patch.object(ListingStats.objects, "select_for_update", side_effect=DatabaseError("deadlock")):
        with pytest.raises(PersistenceError):
            record_view(listing.pk, user=viewer)
    stats = stats_of(listing)
    assert (stats.view_count, stats.unique_view_count) == (0, 0)
    assert not ListingViewer.objects.exists()


@pytest.mark.django_db(transaction=True)
def test_concurrent_views_of_one_listing_are_serialized(listing):
    workers = 8
    barrier = threading.Barrier(workers)
    records, errors = [], []

    def observe(i):
        try:
            barrier.wait()
            records.append(record_view(listing.pk, session_id=f"session-{i % 2}"))
        except Exception as exc:
            errors.append(exc)
        finally:
            connection.close()

    threads = [threading.Thread(target=observe, args=(i,)) for i in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(records) == workers and all(r.accepted for r in records)
    assert sum(r.is_unique_view for r in records) == 2
    stats = stats_of(listing)
    assert (stats.view_count, stats.unique_view_count) == (workers, 2)
    assert ListingViewer.objects.filter(listing=listing).count() == 2
