import random
import uuid
from datetime import timedelta
from typing import Iterable, Optional

from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from django.utils import timezone

from apps.listings.models import Listing
from apps.statistics.services import record_view

User = get_user_model()


def seed_listing_views(n: int = 100, users: Optional[Iterable[User]] = None, anonymous_share: float = 0.4) -> dict:
    """
    Simulate n observations through the view recorder, spread over the last 30 days.
    :return: counters of accepted / unique / rejected observations
    """
    listings = list(Listing.objects.alive().only("id", "owner_id", "title"))
    result = {"accepted": 0, "unique": 0, "rejected": 0}
    if not listings:
        return result
    users_list = list(users) if users is not None else list(User.objects.all())
    sessions = [uuid.uuid4().hex for _ in range(max(n // 5, 1))]
    start = timezone.now() - timedelta(days=30)
    moments = sorted(start + timedelta(minutes=random.randint(0, 30 * 24 * 60)) for _ in range(n))

    for now in moments:
        listing = random.choice(listings)
        if users_list and random.random() > anonymous_share:
            record = record_view(listing.pk, user=random.choice(users_list), now=now)
        else:
            record = record_view(listing.pk, session_id=random.choice(sessions), now=now)
        if record.accepted:
            result["accepted"] += 1
            result["unique"] += int(record.is_unique_view)
        else:
            result["rejected"] += 1
    return result


class Command(BaseCommand):
    help = "Simulate listing views through the view recorder."

    def add_arguments(self, parser):
        parser.add_argument("--views", type=int, default=120, help="number of observations")

    def handle(self, *args, **opts):
        users = list(User.objects.all()[:200])
        result = seed_listing_views(n=opts["views"], users=users)
        self.stdout.write(self.style.SUCCESS(
            f"[views] accepted: {result['accepted']} (unique: {result['unique']}), rejected: {result['rejected']}"))
        self.stdout.write(self.style.SUCCESS("Done."))
