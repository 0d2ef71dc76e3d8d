import django_filters as df

from ..core.enums import PropertyTypes, ListingTypes
from ..listings.models import Listing


class PopularListingFilter(df.FilterSet):
    """
    Filters of the popular listings list.
    """
    city = df.CharFilter(field_name="city", lookup_expr="iexact")
    district = df.CharFilter(field_name="district", lookup_expr="iexact")
    owner = df.NumberFilter(field_name="owner_id")
    property_type = df.ChoiceFilter(field_name="property_type", choices=PropertyTypes.choices)
    listing_type = df.ChoiceFilter(field_name="listing_type", choices=ListingTypes.choices)
    views_min = df.NumberFilter(field_name="views_cnt", lookup_expr="gte")
    viewed_since = df.DateTimeFilter(field_name="listing_stats__last_viewed_at", lookup_expr="gte")

    class Meta:
        model = Listing
        fields = []
