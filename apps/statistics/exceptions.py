from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, PermissionDenied


class ListingNotFound(NotFound):
    default_detail = _("Listing not found.")
    default_code = "listing_not_found"

    def __init__(self, listing_id=None):
        detail = f"Listing with ID {listing_id} not found" if listing_id is not None else None
        super().__init__(detail)


class AnalyticsForbidden(PermissionDenied):
    default_detail = _("Forbidden: You can only view analytics for your own listings")
    default_code = "analytics_forbidden"


class PersistenceError(APIException):
    """The view counters could not be written, nothing was recorded."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = _("Failed to update listing view count.")
    default_code = "persistence_error"
