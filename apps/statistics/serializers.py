from rest_framework import serializers

from ..core.enums import ViewQuality
from ..listings.models import Listing


class ViewRecordSerializer(serializers.Serializer):
    """
    Outcome of POST /listings/{id}/views/.
    """
    listing_id = serializers.IntegerField()
    accepted = serializers.BooleanField()
    is_unique_view = serializers.BooleanField()
    is_owner_view = serializers.BooleanField()
    view_count = serializers.IntegerField()
    unique_view_count = serializers.IntegerField()
    viewer_type = serializers.CharField()
    reason = serializers.CharField(allow_null=True)
    detail = serializers.CharField(allow_blank=True)


class ListingAnalyticsSerializer(serializers.Serializer):
    listing_id = serializers.IntegerField()
    title = serializers.CharField()
    total_views = serializers.IntegerField()
    unique_views = serializers.IntegerField()
    unique_viewers = serializers.IntegerField()
    anonymous_viewers = serializers.IntegerField()
    view_quality_score = serializers.FloatField()
    view_quality_status = serializers.ChoiceField(choices=ViewQuality.choices)
    engagement_rate = serializers.FloatField()
    owner_views = serializers.IntegerField()
    suspicious_activity = serializers.CharField()
    last_viewed_at = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField()
    days_since_creation = serializers.IntegerField()
    views_per_day = serializers.FloatField()
    recommendations = serializers.ListField(child=serializers.CharField())


class MostViewedListingSerializer(serializers.ModelSerializer):
    """Listing row of the popularity lists, needs views_cnt/unique_views_cnt annotations."""
    view_count = serializers.IntegerField(source="views_cnt", read_only=True)
    unique_view_count = serializers.IntegerField(source="unique_views_cnt", read_only=True)

    class Meta:
        model = Listing
        fields = ("id", "title", "location", "city", "district", "price", "currency",
                  "property_type", "listing_type", "owner", "view_count", "unique_view_count")
        read_only_fields = fields


class ViewTotalsSerializer(serializers.Serializer):
    total_views = serializers.IntegerField()
    total_listings = serializers.IntegerField()
    avg_views = serializers.IntegerField()
    listings_with_no_views = serializers.IntegerField()


class ViewSummarySerializer(serializers.Serializer):
    summary = ViewTotalsSerializer()
    most_viewed = MostViewedListingSerializer(many=True)


class OwnerViewTotalsSerializer(serializers.Serializer):
    owner_id = serializers.IntegerField()
    owner_name = serializers.CharField()
    current_views = serializers.IntegerField()
    current_unique_views = serializers.IntegerField()
    current_listing_count = serializers.IntegerField()
    lifetime_views = serializers.IntegerField()
    total_views = serializers.IntegerField()


class ResetResultSerializer(serializers.Serializer):
    listings_reset = serializers.IntegerField()
    viewers_deleted = serializers.IntegerField()
    views_deleted = serializers.IntegerField()
    owners_reset = serializers.IntegerField()
