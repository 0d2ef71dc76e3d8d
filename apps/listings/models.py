import math

from django.db import models
from django.db.models import F, Value, IntegerField
from django.db.models.functions import Coalesce
from django.conf import settings
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from ..core.enums import PropertyTypes, ListingTypes, DeletionStatus
from ..core.models import TimeStampedModel


class ListingQuerySet(models.QuerySet):
    def alive(self):
        """Everything except soft-deleted listings."""
        return self.exclude(deletion_status=DeletionStatus.DELETED)

    def visible(self):
        return self.alive().filter(is_active=True)

    def with_view_counts(self):
        """Annotates views_cnt and unique_views_cnt (0 for listings without stats)."""
        return self.select_related("listing_stats").annotate(
            views_cnt=Coalesce(F("listing_stats__view_count"), Value(0), output_field=IntegerField()),
            unique_views_cnt=Coalesce(F("listing_stats__unique_view_count"), Value(0), output_field=IntegerField()),
        )


class Listing(TimeStampedModel):
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="listings", verbose_name=_("Owner")
    )
    title = models.CharField(max_length=120, verbose_name=_("Title"))
    description = models.TextField(blank=True, verbose_name=_("Description"))
    location = models.CharField(max_length=255, verbose_name=_("Location"))
    city = models.CharField(max_length=100, blank=True, verbose_name=_("City"))
    district = models.CharField(max_length=100, blank=True, verbose_name=_("District"))
    price = models.DecimalField(max_digits=12, decimal_places=2, default=0, verbose_name=_("Price"))
    currency = models.CharField(max_length=3, default="USD", verbose_name=_("Currency"))
    property_type = models.CharField(
        max_length=20,
        choices=PropertyTypes.choices,
        default=PropertyTypes.APARTMENT,
        verbose_name=_("Property type"))
    listing_type = models.CharField(
        max_length=10,
        choices=ListingTypes.choices,
        default=ListingTypes.SALE,
        verbose_name=_("Listing type"))

    is_active = models.BooleanField(default=True, verbose_name=_("Is active"))
    deletion_status = models.CharField(
        max_length=20,
        choices=DeletionStatus.choices,
        default=DeletionStatus.ACTIVE,
        db_index=True,
        verbose_name=_("Deletion status"))

    objects = ListingQuerySet.as_manager()

    class Meta:
        verbose_name = 'Listing'
        verbose_name_plural = 'Listings'
        indexes = [models.Index(fields=["owner", "deletion_status", "-created_at"], name="listing_owner_status_idx")]

    def __str__(self):
        return f"{self.title} ({self.location})"

    @property
    def is_deleted(self):
        return self.deletion_status == DeletionStatus.DELETED

    def soft_delete(self):
        """Hide the listing. View counters stay until the row itself is removed."""
        self.deletion_status = DeletionStatus.DELETED
        self.save(update_fields=["deletion_status", "updated_at"])

    def days_since_creation(self, now=None) -> int:
        """
        Whole days since created_at, rounded up (a listing created an hour ago is 1 day old).
        """
        now = now or timezone.now()
        elapsed = (now - self.created_at).total_seconds()
        return max(math.ceil(elapsed / 86400), 0)
