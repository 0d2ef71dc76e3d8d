import pytest
from django.urls import reverse

from apps.statistics.models import ListingStats, ListingViewer, ListingView
from apps.statistics.services import record_view

pytestmark = pytest.mark.django_db


def set_counters(listing, views, unique):
    ListingStats.objects.filter(pk=listing.pk).update(view_count=views, unique_view_count=unique)


def test_summary_is_for_superadmin_only(api_client, listing, owner, superadmin):
    url = reverse("views-summary")
    assert api_client.get(url).status_code == 401

    api_client.force_authenticate(user=owner)
    assert api_client.get(url).status_code == 403

    set_counters(listing, 8, 3)
    api_client.force_authenticate(user=superadmin)
    resp = api_client.get(url)
    assert resp.status_code == 200
    assert resp.data["summary"]["total_views"] == 8
    assert resp.data["most_viewed"][0]["id"] == listing.pk
    assert resp.data["most_viewed"][0]["view_count"] == 8
    assert resp.data["most_viewed"][0]["unique_view_count"] == 3


def test_reset_clears_everything(api_client, listing, owner, viewer, superadmin):
    record_view(listing.pk, user=viewer)
    record_view(listing.pk, session_id="anon")
    owner.total_views = 9
    owner.save(update_fields=["total_views"])

    api_client.force_authenticate(user=owner)
    assert api_client.post(reverse("views-reset")).status_code == 403

    api_client.force_authenticate(user=superadmin)
    resp = api_client.post(reverse("views-reset"))
    assert resp.status_code == 200
    assert resp.data == {"listings_reset": 1, "viewers_deleted": 2, "views_deleted": 2, "owners_reset": 1}

    stats = ListingStats.objects.get(pk=listing.pk)
    assert (stats.view_count, stats.unique_view_count, stats.last_viewed_at) == (0, 0, None)
    assert not ListingViewer.objects.exists() and not ListingView.objects.exists()
    owner.refresh_from_db()
    assert owner.total_views == 0


def test_owner_totals_access(api_client, listing, owner, viewer, superadmin):
    url = reverse("owner-view-totals", kwargs={"user_id": owner.pk})
    set_counters(listing, 4, 2)

    api_client.force_authenticate(user=owner)
    resp = api_client.get(url)
    assert resp.status_code == 200
    assert resp.data["current_views"] == 4
    assert resp.data["total_views"] == 4

    api_client.force_authenticate(user=viewer)
    assert api_client.get(url).status_code == 403

    api_client.force_authenticate(user=superadmin)
    assert api_client.get(url).status_code == 200
    assert api_client.get(reverse("owner-view-totals", kwargs={"user_id": owner.pk + 1000})).status_code == 404


def test_popular_listings_are_ordered_by_views(api_client, make_listing, owner):
    low = make_listing(owner=owner, city="Hargeisa")
    high = make_listing(owner=owner, city="Hargeisa")
    hidden = make_listing(owner=owner, city="Hargeisa", is_active=False)
    set_counters(low, 2, 1)
    set_counters(high, 20, 5)
    set_counters(hidden, 99, 9)

    resp = api_client.get(reverse("popular-listings-list"), {"city": "hargeisa"})
    assert resp.status_code == 200
    ids = [item["id"] for item in resp.data["results"]]
    assert ids == [high.pk, low.pk]

    resp = api_client.get(reverse("popular-listings-list"), {"views_min": 10})
    assert [item["id"] for item in resp.data["results"]] == [high.pk]
