from django.contrib import admin

from .models import ListingView, ListingViewer, ListingStats


@admin.register(ListingView)
class ListingViewAdmin(admin.ModelAdmin):
    list_display = ("listing", "user", "session_id", "viewer_type", "is_unique", "created_at")
    search_fields = ("listing__title", "user__email", "session_id")
    list_filter = ("viewer_type", "is_unique", "created_at")


@admin.register(ListingViewer)
class ListingViewerAdmin(admin.ModelAdmin):
    list_display = ("listing", "viewer_key", "viewer_type", "views_count", "window_views", "last_viewed_at")
    search_fields = ("listing__title", "viewer_key", "user__email")
    list_filter = ("viewer_type",)
    readonly_fields = ("viewer_key", "views_count", "window_views", "window_started_at", "last_viewed_at")


@admin.register(ListingStats)
class ListingStatsAdmin(admin.ModelAdmin):
    list_display = ("listing", "view_count", "unique_view_count", "last_viewed_at",
                    "owner_view_count", "excessive_views", "flagged_at")
    list_filter = ("flagged_at",)
    search_fields = ("listing__title",)
    readonly_fields = ("view_count", "unique_view_count", "last_viewed_at", "owner_view_count",
                       "last_owner_view_at", "excessive_views", "flagged_at", "flag_reason")
