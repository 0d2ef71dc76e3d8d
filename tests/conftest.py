import pytest
from faker import Faker
from rest_framework.test import APIClient

from apps.core.enums import Roles
from apps.listings.models import Listing
from apps.users.models import User

fake = Faker()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    def _make_user(role=Roles.USER, **kwargs):
        username = kwargs.pop("username", f"{fake.user_name()}{fake.random_int(1000, 9999)}")
        return User.objects.create_user(
            username=username,
            email=kwargs.pop("email", f"{username}@example.com"),
            password=kwargs.pop("password", "SecurePassword1!"),
            role=role,
            **kwargs,
        )
    return _make_user


@pytest.fixture
def owner(make_user):
    return make_user(Roles.AGENT)


@pytest.fixture
def viewer(make_user):
    return make_user(Roles.USER)


@pytest.fixture
def superadmin(make_user):
    return make_user(Roles.SUPERADMIN)


@pytest.fixture
def make_listing(db):
    def _make_listing(owner=None, **kwargs):
        city = fake.city()
        defaults = {
            "title": f"{fake.word().capitalize()} Apartment",
            "description": fake.paragraph(nb_sentences=2),
            "location": f"{city}, {fake.street_name()}",
            "city": city,
            "price": 120_000,
        }
        defaults.update(kwargs)
        return Listing.objects.create(owner=owner, **defaults)
    return _make_listing


@pytest.fixture
def listing(make_listing, owner):
    return make_listing(owner=owner)
