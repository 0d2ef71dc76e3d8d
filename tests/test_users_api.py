import pytest
from django.urls import reverse

from apps.statistics.models import ListingViewer

pytestmark = pytest.mark.django_db

PASSWORD = "SecurePassword1!"


def obtain_tokens(api_client, user):
    resp = api_client.post(reverse("token-obtain"), {"email": user.email, "password": PASSWORD}, format="json")
    assert resp.status_code == 200, resp.data
    return resp.data["access"], resp.data["refresh"]


def test_token_login_and_current_user(api_client, viewer):
    access, refresh = obtain_tokens(api_client, viewer)

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
    me = api_client.get(reverse("user-me"))
    assert me.status_code == 200
    assert me.data["email"] == viewer.email
    assert me.data["total_views"] == 0

    refreshed = api_client.post(reverse("token-refresh"), {"refresh": refresh}, format="json")
    assert refreshed.status_code == 200
    assert refreshed.data["access"]


def test_current_user_is_read_only(api_client, viewer):
    api_client.force_authenticate(user=viewer)
    assert api_client.patch(reverse("user-me"), {"nickname": "renamed"}, format="json").status_code == 405
    viewer.refresh_from_db()
    assert viewer.nickname != "renamed"


def test_wrong_password_gets_no_token(api_client, viewer):
    resp = api_client.post(reverse("token-obtain"), {"email": viewer.email, "password": "nope"}, format="json")
    assert resp.status_code == 401


def test_current_user_requires_identity(api_client):
    assert api_client.get(reverse("user-me")).status_code == 401


def test_bearer_token_view_is_counted_by_account(api_client, listing, viewer):
    access, _ = obtain_tokens(api_client, viewer)
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

    resp = api_client.post(reverse("listing-record-view", kwargs={"listing_id": listing.pk}))
    assert resp.status_code == 200, resp.data
    assert resp.data["viewer_type"] == "account"
    assert ListingViewer.objects.get(listing=listing).user_id == viewer.pk


def test_invalid_token_on_analytics_is_unauthorized(api_client, listing, owner):
    api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-real-token")
    resp = api_client.get(reverse("listing-analytics", kwargs={"listing_id": listing.pk}))
    assert resp.status_code == 401

    api_client.credentials()
    access, _ = obtain_tokens(api_client, owner)
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
    assert api_client.get(reverse("listing-analytics", kwargs={"listing_id": listing.pk})).status_code == 200
