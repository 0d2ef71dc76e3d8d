from django.urls import path
from rest_framework.routers import DefaultRouter

from .views import (
    RecordListingViewView, ListingAnalyticsView, ViewSummaryView, ResetViewStatsView,
    OwnerViewTotalsView, PopularListingsViewSet,
)

router = DefaultRouter()
router.register(r"popular/listings", PopularListingsViewSet, basename="popular-listings")

# mounted under /listings/
listing_urlpatterns = [
    path("<int:listing_id>/views/", RecordListingViewView.as_view(), name="listing-record-view"),
    path("<int:listing_id>/analytics/", ListingAnalyticsView.as_view(), name="listing-analytics"),
]

urlpatterns = [
    path("views/summary/", ViewSummaryView.as_view(), name="views-summary"),
    path("views/reset/", ResetViewStatsView.as_view(), name="views-reset"),
    path("owners/<int:user_id>/views/", OwnerViewTotalsView.as_view(), name="owner-view-totals"),
] + router.urls
