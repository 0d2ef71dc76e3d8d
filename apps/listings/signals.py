from django.db.models.signals import post_save
from django.dispatch import receiver

from ..listings.models import Listing
from ..statistics.models import ListingStats


@receiver(post_save, sender=Listing)
def create_listing_stats(sender, instance: Listing, created, **kwargs):
    """
    Every new listing starts with zeroed view counters.
    """
    if created:
        ListingStats.objects.get_or_create(listing=instance)
