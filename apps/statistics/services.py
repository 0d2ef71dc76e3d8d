import logging
from dataclasses import dataclass
from functools import partial
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone

from ..core.enums import ViewerType, ViewRejection
from ..listings.models import Listing
from .conf import tracking_setting
from .exceptions import ListingNotFound, PersistenceError
from .models import ListingStats, ListingViewer, ListingView

logger = logging.getLogger(__name__)
User = get_user_model()


@dataclass
class ViewRecord:
    """Outcome of one observation of a listing."""
    listing_id: int
    accepted: bool
    is_unique_view: bool
    is_owner_view: bool
    view_count: int
    unique_view_count: int
    viewer_type: str
    reason: Optional[ViewRejection] = None

    @property
    def detail(self) -> str:
        return str(self.reason.label) if self.reason else ""


def find_listing(listing_id) -> Listing:
    """
    Listing by primary key, soft-deleted ones excluded.
    :raises ListingNotFound:
    """
    try:
        return Listing.objects.alive().get(pk=listing_id)
    except (Listing.DoesNotExist, ValueError, TypeError):
        raise ListingNotFound(listing_id)


def _abuse_window_expired(viewer: ListingViewer, now) -> bool:
    start = viewer.window_started_at
    return start is None or start <= now - tracking_setting("ABUSE_WINDOW")


def _views_in_window(viewer: ListingViewer, now) -> int:
    return 0 if _abuse_window_expired(viewer, now) else viewer.window_views


def _rejection_reason(stats: ListingStats, viewer: Optional[ListingViewer], is_owner_view: bool, now):
    """
    Owner cooldown first, then the excessive viewing throttle (accounts only).
    """
    if is_owner_view and stats.last_viewed_at and stats.last_viewed_at > now - tracking_setting("OWNER_VIEW_COOLDOWN"):
        return ViewRejection.RATE_LIMITED
    if (viewer is not None and viewer.viewer_type == ViewerType.ACCOUNT
            and _views_in_window(viewer, now) > tracking_setting("ABUSE_THRESHOLD")):
        return ViewRejection.ABUSIVE
    return None


def _flag_excessive_viewing(stats: ListingStats, now):
    ListingStats.objects.filter(pk=stats.pk).update(
        excessive_views=F("excessive_views") + 1,
        flagged_at=now,
        flag_reason=str(ViewRejection.ABUSIVE.label),
        updated_at=now,
    )


def _accept_view(listing, stats, viewer, user, session_id, viewer_type, is_owner_view, now) -> bool:
    """
    Counter updates of an accepted view. Returns True when the view is unique.
    """
    is_unique = viewer is None
    changes = {
        "view_count": F("view_count") + 1,
        "last_viewed_at": now,
        "updated_at": now,
    }
    if is_unique:
        changes["unique_view_count"] = F("unique_view_count") + 1
    if is_owner_view:
        changes["owner_view_count"] = F("owner_view_count") + 1
        changes["last_owner_view_at"] = now
    ListingStats.objects.filter(pk=stats.pk).update(**changes)

    if is_unique:
        ListingViewer.objects.create(
            listing=listing,
            viewer_type=viewer_type,
            viewer_key=ListingViewer.key_for(user, session_id),
            user=user,
            session_id=session_id if user is None else "",
            views_count=1,
            window_views=1,
            window_started_at=now,
            last_viewed_at=now,
        )
    elif _abuse_window_expired(viewer, now):
        # first view of a new window
        ListingViewer.objects.filter(pk=viewer.pk).update(
            views_count=F("views_count") + 1, window_views=1, window_started_at=now,
            last_viewed_at=now, updated_at=now)
    else:
        ListingViewer.objects.filter(pk=viewer.pk).update(
            views_count=F("views_count") + 1, window_views=F("window_views") + 1,
            last_viewed_at=now, updated_at=now)

    ListingView.objects.create(
        listing=listing,
        user=user,
        session_id=session_id if user is None else "",
        viewer_type=ViewerType.OWNER if is_owner_view else viewer_type,
        is_unique=is_unique,
    )
    return is_unique


def record_view(listing_id, user=None, session_id: str = "", now=None) -> ViewRecord:
    """
    Records one observation of a listing.

    The whole read-decide-write sequence runs under a row lock on the listing's
    ListingStats, so concurrent viewers of one listing are serialized while
    other listings are not blocked.
    Rejections (owner cooldown, excessive viewing) are returned with accepted=False.

    :param listing_id: listing primary key
    :param user: authenticated viewer or None
    :param session_id: anonymous session key, used when user is None
    :raises ListingNotFound: listing does not exist or is soft-deleted
    :raises PersistenceError: the counters could not be written
    """
    if user is not None and not user.is_authenticated:
        user = None
    if user is None and not session_id:
        raise ValueError("record_view() needs an authenticated user or an anonymous session id")

    now = now or timezone.now()
    listing = find_listing(listing_id)
    viewer_type = ViewerType.ACCOUNT if user is not None else ViewerType.ANONYMOUS
    is_owner_view = user is not None and listing.owner_id is not None and listing.owner_id == user.pk

    try:
        with transaction.atomic():
            ListingStats.objects.get_or_create(listing=listing)
            stats = ListingStats.objects.select_for_update().get(pk=listing.pk)
            viewer = ListingViewer.objects.filter(
                listing=listing, viewer_key=ListingViewer.key_for(user, session_id)).first()

            reason = _rejection_reason(stats, viewer, is_owner_view, now)
            if reason is not None:
                if reason == ViewRejection.ABUSIVE:
                    _flag_excessive_viewing(stats, now)
                is_unique = False
            else:
                is_unique = _accept_view(listing, stats, viewer, user, session_id, viewer_type, is_owner_view, now)
                stats.refresh_from_db(fields=["view_count", "unique_view_count"])
                if listing.owner_id is not None:
                    transaction.on_commit(partial(increment_lifetime_views, listing.owner_id))
    except DatabaseError as exc:
        logger.exception("Failed to record view. listing=%s viewer=%s error=%s", listing.pk, viewer_type, exc)
        raise PersistenceError() from exc

    record = ViewRecord(
        listing_id=listing.pk,
        accepted=reason is None,
        is_unique_view=is_unique,
        is_owner_view=is_owner_view,
        view_count=stats.view_count,
        unique_view_count=stats.unique_view_count,
        viewer_type=str(viewer_type),
        reason=reason,
    )
    if record.accepted:
        logger.info("Listing view: %r (ID: %s) viewer=%s owner=%s unique=%s views=%s unique_views=%s",
                    listing.title, listing.pk, viewer_type, is_owner_view, is_unique,
                    record.view_count, record.unique_view_count)
    else:
        logger.warning("Listing view rejected: listing=%s viewer=%s reason=%s",
                       listing.pk, ListingViewer.key_for(user, session_id), reason)
    return record


def increment_lifetime_views(owner_id) -> bool:
    """
    Best effort +1 to the owner's lifetime views.
    :return: True on success. Otherwise, log errors and return False.
    """
    try:
        updated = User.objects.filter(pk=owner_id).update(total_views=F("total_views") + 1)
    except DatabaseError as exc:
        logger.exception("Failed to update owner total views. owner=%s error=%s", owner_id, exc)
        return False
    if not updated:
        logger.warning("Owner total views not updated (owner is gone). owner=%s", owner_id)
        return False
    return True


def reset_view_statistics() -> dict:
    """
    Zeroes all view counters, forgets all viewers and history, zeroes owners' lifetime views.
    """
    now = timezone.now()
    with transaction.atomic():
        listings_reset = ListingStats.objects.update(
            view_count=0,
            unique_view_count=0,
            last_viewed_at=None,
            owner_view_count=0,
            last_owner_view_at=None,
            excessive_views=0,
            flagged_at=None,
            flag_reason="",
            updated_at=now,
        )
        viewers_deleted, _ = ListingViewer.objects.all().delete()
        views_deleted, _ = ListingView.objects.all().delete()
        owners_reset = User.objects.filter(total_views__gt=0).update(total_views=0)

    logger.warning("View statistics reset: listings=%s viewers=%s history=%s owners=%s",
                   listings_reset, viewers_deleted, views_deleted, owners_reset)
    return {
        "listings_reset": listings_reset,
        "viewers_deleted": viewers_deleted,
        "views_deleted": views_deleted,
        "owners_reset": owners_reset,
    }
