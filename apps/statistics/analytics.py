from django.db.models import Avg, Count, F, Q, Sum, Value, IntegerField
from django.db.models.functions import Coalesce
from django.utils import timezone
from rest_framework.exceptions import NotAuthenticated

from ..core.enums import ViewerType, ViewQuality
from ..core.roles import is_superadmin, is_listing_owner
from ..listings.models import Listing
from .conf import tracking_setting
from .exceptions import AnalyticsForbidden
from .models import ListingStats, ListingViewer
from .services import find_listing

LOW_QUALITY_MESSAGE = "Low view quality detected"

REC_PRESENTATION = "Consider improving property presentation to increase genuine interest"
REC_EXPOSURE = "Property may need more exposure through marketing"
REC_SAME_USER = "All views are from the same user - consider broader marketing"
REC_OWNER_VIEWS = "Owner views detected - ensure you're not inflating your own views"
REC_ENGAGEMENT = "Low engagement rate - consider improving property description and photos"


def quality_status(score: float) -> ViewQuality:
    """Band of an unrounded view quality score, lower bounds inclusive."""
    if score < 30:
        return ViewQuality.POOR
    if score < 50:
        return ViewQuality.FAIR
    if score < 70:
        return ViewQuality.GOOD
    if score < 90:
        return ViewQuality.VERY_GOOD
    return ViewQuality.EXCELLENT


def recommendations_for(score: float, total_views: int, unique_views: int,
                        owner_views: int, engagement_rate: float) -> list[str]:
    """
    Every rule is checked on its own, in this order.
    """
    recommendations = []
    if score < 50:
        recommendations.append(REC_PRESENTATION)
    if unique_views < 10:
        recommendations.append(REC_EXPOSURE)
    if total_views > 0 and unique_views == 0:
        recommendations.append(REC_SAME_USER)
    if owner_views > 0:
        recommendations.append(REC_OWNER_VIEWS)
    if engagement_rate < 1.5:
        recommendations.append(REC_ENGAGEMENT)
    return recommendations


def can_view_analytics(user, listing) -> bool:
    return is_superadmin(user) or is_listing_owner(user, listing)


def build_listing_analytics(listing: Listing, now=None) -> dict:
    """
    Derived metrics of one listing. No locks: the result is a snapshot.
    """
    now = now or timezone.now()
    stats = getattr(listing, "listing_stats", None) or ListingStats(listing=listing)
    owner_key = ListingViewer.account_key(listing.owner_id) if listing.owner_id is not None else None
    viewers = ListingViewer.objects.filter(listing=listing).aggregate(
        accounts=Count("id", filter=Q(viewer_type=ViewerType.ACCOUNT)),
        sessions=Count("id", filter=Q(viewer_type=ViewerType.ANONYMOUS)),
        owner=Count("id", filter=Q(viewer_key=owner_key)),
    )

    total_views = stats.view_count or 0
    unique_views = stats.unique_view_count or 0
    unique_viewers = viewers["accounts"]
    anonymous_viewers = viewers["sessions"]
    owner_views = 1 if owner_key and viewers["owner"] else 0

    score = unique_views / total_views * 100 if total_views > 0 else 0.0
    # kept as unique views per recorded viewer
    viewer_total = unique_viewers + anonymous_viewers
    engagement_rate = unique_views / viewer_total if viewer_total > 0 else 0.0

    days = listing.days_since_creation(now)
    views_per_day = unique_views / days if days > 0 else 0.0

    return {
        "listing_id": listing.pk,
        "title": listing.title,
        "total_views": total_views,
        "unique_views": unique_views,
        "unique_viewers": unique_viewers,
        "anonymous_viewers": anonymous_viewers,
        "view_quality_score": round(score, 2),
        "view_quality_status": quality_status(score),
        "engagement_rate": round(engagement_rate, 2),
        "owner_views": owner_views,
        "suspicious_activity": LOW_QUALITY_MESSAGE if score < 50 else "Normal",
        "last_viewed_at": stats.last_viewed_at,
        "created_at": listing.created_at,
        "days_since_creation": days,
        "views_per_day": round(views_per_day, 2),
        "recommendations": recommendations_for(score, total_views, unique_views, owner_views, engagement_rate),
    }


def get_listing_analytics(listing_id, user, now=None) -> dict:
    """
    Analytics report for the listing owner or a superadmin.

    :raises NotAuthenticated: no identity
    :raises ListingNotFound: listing missing or soft-deleted
    :raises AnalyticsForbidden: neither owner nor superadmin
    """
    if user is None or not user.is_authenticated:
        raise NotAuthenticated()
    listing = find_listing(listing_id)
    if not can_view_analytics(user, listing):
        raise AnalyticsForbidden()
    return build_listing_analytics(listing, now=now)


def most_viewed_listings(limit=None):
    """Non-deleted listings ordered by views (desc)."""
    limit = limit or tracking_setting("MOST_VIEWED_LIMIT")
    return (
        Listing.objects.alive()
        .with_view_counts()
        .order_by("-views_cnt", "-created_at")[:limit]
    )


def get_view_summary(limit=None) -> dict:
    """
    Totals over all non-deleted listings + the most viewed ones.
    """
    listings = Listing.objects.alive()
    totals = listings.aggregate(
        total_views=Coalesce(Sum("listing_stats__view_count"), Value(0), output_field=IntegerField()),
        total_listings=Count("id"),
        avg_views=Avg(Coalesce(F("listing_stats__view_count"), Value(0), output_field=IntegerField())),
    )
    no_views = listings.filter(Q(listing_stats__isnull=True) | Q(listing_stats__view_count=0)).count()
    return {
        "summary": {
            "total_views": totals["total_views"],
            "total_listings": totals["total_listings"],
            "avg_views": round(totals["avg_views"] or 0),
            "listings_with_no_views": no_views,
        },
        "most_viewed": list(most_viewed_listings(limit)) if totals["total_listings"] else [],
    }


def get_owner_view_totals(owner) -> dict:
    """
    Views of the owner's current listings and the lifetime counter.

    Lifetime views keep counting views of listings deleted since; if the
    counter was never filled the current total is reported instead.
    """
    current = Listing.objects.alive().filter(owner=owner).aggregate(
        current_views=Coalesce(Sum("listing_stats__view_count"), Value(0), output_field=IntegerField()),
        current_unique_views=Coalesce(Sum("listing_stats__unique_view_count"), Value(0), output_field=IntegerField()),
        current_listing_count=Count("id"),
    )
    lifetime = owner.total_views or 0
    return {
        "owner_id": owner.pk,
        "owner_name": owner.get_full_name() or owner.username,
        **current,
        "lifetime_views": lifetime,
        "total_views": lifetime if lifetime > 0 else current["current_views"],
    }
