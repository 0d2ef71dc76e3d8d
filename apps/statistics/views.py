from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, permissions, status
from rest_framework.filters import OrderingFilter
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiResponse, OpenApiExample

from ..core.permissions import IsSuperAdmin, OwnerTotalsPermission
from ..core.utils import get_request_viewer
from ..listings.models import Listing
from .analytics import get_listing_analytics, get_view_summary, get_owner_view_totals
from .filters import PopularListingFilter
from .serializers import (
    ViewRecordSerializer, ListingAnalyticsSerializer, MostViewedListingSerializer,
    ViewSummarySerializer, OwnerViewTotalsSerializer, ResetResultSerializer,
)
from .services import record_view, reset_view_statistics

User = get_user_model()


@extend_schema(
    description=(
        "Record a view of a listing.\n"
        "Authenticated callers are counted by account, anonymous callers by session.\n"
        "- owner views are limited to one per hour (429, reason `rate_limited`)\n"
        "- excessive repeat viewing by one account is rejected (429, reason `abusive`)"
    ),
    request=None,
    responses={
        200: OpenApiResponse(response=ViewRecordSerializer, description="View recorded"),
        404: OpenApiResponse(description="Listing not found"),
        429: OpenApiResponse(response=ViewRecordSerializer, description="View rejected, counters unchanged"),
    },
    examples=[
        OpenApiExample("Unique view", response_only=True, status_codes=["200"], value={
            "listing_id": 12, "accepted": True, "is_unique_view": True, "is_owner_view": False,
            "view_count": 31, "unique_view_count": 17, "viewer_type": "account", "reason": None, "detail": ""}),
        OpenApiExample("Owner rate limited", response_only=True, status_codes=["429"], value={
            "listing_id": 12, "accepted": False, "is_unique_view": False, "is_owner_view": True,
            "view_count": 31, "unique_view_count": 17, "viewer_type": "account", "reason": "rate_limited",
            "detail": "Owner view rate limited (1 view per hour)"}),
    ],
)
class RecordListingViewView(APIView):
    """POST /api/v1/listings/{id}/views/"""
    permission_classes = [permissions.AllowAny]

    def post(self, request, listing_id):
        user, session_id = get_request_viewer(request)
        record = record_view(listing_id, user=user, session_id=session_id)
        code = status.HTTP_200_OK if record.accepted else status.HTTP_429_TOO_MANY_REQUESTS
        return Response(ViewRecordSerializer(record).data, status=code)


@extend_schema(
    summary="View analytics of a listing. The owner of the listing or superadmin.",
    request=None,
    responses={
        200: OpenApiResponse(response=ListingAnalyticsSerializer, description="Analytics report"),
        401: OpenApiResponse(description="Unauthorized"),
        403: OpenApiResponse(description="Forbidden"),
        404: OpenApiResponse(description="Listing not found"),
    },
)
class ListingAnalyticsView(APIView):
    """GET /api/v1/listings/{id}/analytics/"""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, listing_id):
        report = get_listing_analytics(listing_id, request.user)
        return Response(ListingAnalyticsSerializer(report).data)


@extend_schema(
    summary="Views over all listings + most viewed listings (superadmin).",
    request=None,
    responses={200: OpenApiResponse(response=ViewSummarySerializer, description="Summary")},
)
class ViewSummaryView(APIView):
    """GET /api/v1/statistics/views/summary/?limit=10"""
    permission_classes = [IsSuperAdmin]

    def get(self, request):
        try:
            limit = int(request.query_params.get("limit", 0)) or None
        except ValueError:
            limit = None
        return Response(ViewSummarySerializer(get_view_summary(limit)).data)


@extend_schema(
    summary="Reset all view statistics (superadmin).",
    request=None,
    responses={200: OpenApiResponse(response=ResetResultSerializer, description="Counters reset")},
)
class ResetViewStatsView(APIView):
    """POST /api/v1/statistics/views/reset/"""
    permission_classes = [IsSuperAdmin]

    def post(self, request):
        return Response(ResetResultSerializer(reset_view_statistics()).data)


@extend_schema(
    summary="Current and lifetime views of an owner (the owner or superadmin).",
    request=None,
    responses={
        200: OpenApiResponse(response=OwnerViewTotalsSerializer, description="Owner totals"),
        403: OpenApiResponse(description="Forbidden"),
        404: OpenApiResponse(description="User not found"),
    },
)
class OwnerViewTotalsView(APIView):
    """GET /api/v1/statistics/owners/{id}/views/"""
    permission_classes = [permissions.IsAuthenticated, OwnerTotalsPermission]

    def get(self, request, user_id):
        owner = get_object_or_404(User, pk=user_id)
        self.check_object_permissions(request, owner)
        return Response(OwnerViewTotalsSerializer(get_owner_view_totals(owner)).data)


@extend_schema(
    description=(
        "List active listings ordered by views.\n"
        "Annotated fields in response: `view_count`, `unique_view_count`.\n"
        "Filters: `city`, `district`, `owner`, `property_type`, `listing_type`, `views_min`, `viewed_since`."
    ),
    request=None,
    responses={200: OpenApiResponse(response=MostViewedListingSerializer,
                                    description="List of popular listings (paginated)")},
)
class PopularListingsViewSet(viewsets.ReadOnlyModelViewSet):
    """GET /api/v1/statistics/popular/listings/ - list """
    serializer_class = MostViewedListingSerializer
    permission_classes = [permissions.AllowAny]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = PopularListingFilter
    ordering_fields = ["views_cnt", "unique_views_cnt", "created_at", "price"]
    ordering = ["-views_cnt", "-unique_views_cnt", "-created_at"]

    def get_queryset(self):
        return Listing.objects.visible().with_view_counts()
