from django.utils.translation import gettext_lazy as _
from django.conf import settings
from django.db import models
from django.db.models import F, Q

from ..core.enums import ViewerType
from ..core.models import TimeStampedModel


class ListingStats(TimeStampedModel):
    """
    View counters of a listing.

    - view_count: every accepted view, repeats included
    - unique_view_count: first view of each viewer identity
    - last_viewed_at: time of the last accepted view (owner cooldown)
    - owner_view_count .. flag_reason: suspicious activity bookkeeping,
      never part of the view counters
    """
    listing = models.OneToOneField(
        "listings.Listing",
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="listing_stats",
        verbose_name=_("Listing")
    )
    view_count = models.PositiveIntegerField(default=0, verbose_name=_("Views count"))
    unique_view_count = models.PositiveIntegerField(default=0, verbose_name=_("Unique views count"))
    last_viewed_at = models.DateTimeField(null=True, blank=True, verbose_name=_("Last viewed at"))

    owner_view_count = models.PositiveIntegerField(default=0, verbose_name=_("Owner views"))
    last_owner_view_at = models.DateTimeField(null=True, blank=True, verbose_name=_("Last owner view"))
    excessive_views = models.PositiveIntegerField(default=0, verbose_name=_("Excessive views"))
    flagged_at = models.DateTimeField(null=True, blank=True, verbose_name=_("Flagged at"))
    flag_reason = models.CharField(max_length=120, blank=True, verbose_name=_("Flag reason"))

    class Meta:
        verbose_name = "Listing stats"
        verbose_name_plural = "Listing stats"
        constraints = [
            models.CheckConstraint(condition=Q(unique_view_count__lte=F("view_count")),
                                   name="stats_unique_lte_total"),
        ]

    def __str__(self):
        return f"{self.listing_id}: {self.view_count} views / {self.unique_view_count} unique"


class ListingViewer(TimeStampedModel):
    """
    A viewer identity that has been counted as a unique view of a listing.

    Account rows and anonymous (session) rows together are the unique viewer set,
    so their number always equals ListingStats.unique_view_count.
    views_count / window_views drive the excessive viewing throttle.
    """
    listing = models.ForeignKey(
        "listings.Listing",
        on_delete=models.CASCADE,
        related_name="viewers",
        verbose_name=_("Listing")
    )
    viewer_type = models.CharField(
        max_length=10,
        choices=[(ViewerType.ACCOUNT, ViewerType.ACCOUNT.label), (ViewerType.ANONYMOUS, ViewerType.ANONYMOUS.label)],
        verbose_name=_("Viewer type"))
    # "user:<pk>" or "session:<key>", survives the user being deleted
    viewer_key = models.CharField(max_length=80, verbose_name=_("Viewer key"))
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="viewed_listings",
        verbose_name=_("User")
    )
    session_id = models.CharField(max_length=64, blank=True, verbose_name=_("Session ID"))
    views_count = models.PositiveIntegerField(default=0, verbose_name=_("Views count"))
    window_views = models.PositiveIntegerField(default=0, verbose_name=_("Views in abuse window"))
    window_started_at = models.DateTimeField(null=True, blank=True, verbose_name=_("Abuse window start"))
    last_viewed_at = models.DateTimeField(null=True, blank=True, verbose_name=_("Last viewed at"))

    class Meta:
        verbose_name = "Listing viewer"
        verbose_name_plural = "Listing viewers"
        constraints = [
            models.UniqueConstraint(fields=["listing", "viewer_key"], name="unique_listing_viewer"),
        ]

    def __str__(self):
        return f"{self.listing_id} <- {self.viewer_key}"

    @staticmethod
    def account_key(user_id) -> str:
        return f"user:{user_id}"

    @classmethod
    def key_for(cls, user=None, session_id: str = "") -> str:
        if user is not None:
            return cls.account_key(user.pk)
        return f"session:{session_id}"


class ListingView(TimeStampedModel):
    """
    History: one row per accepted view.
    """
    listing = models.ForeignKey(
        "listings.Listing",
        on_delete=models.CASCADE,
        related_name="stats_views",
        verbose_name=_("Listing")
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        verbose_name=_("User")
    )
    session_id = models.CharField(max_length=64, blank=True, verbose_name=_("Session ID"))
    viewer_type = models.CharField(max_length=10, choices=ViewerType.choices, verbose_name=_("Viewer type"))
    is_unique = models.BooleanField(default=False, verbose_name=_("Unique view"))

    class Meta:
        verbose_name = "Listing view"
        verbose_name_plural = "Listing views"
        indexes = [models.Index(fields=["listing", "-created_at"], name="listing_view_recent_idx")]
