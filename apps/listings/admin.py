from django.contrib import admin, messages

from .models import Listing
from ..core.enums import DeletionStatus


@admin.action(description="Soft delete selected")
def mark_deleted(modeladmin, request, queryset):
    updated = queryset.exclude(deletion_status=DeletionStatus.DELETED).update(deletion_status=DeletionStatus.DELETED)
    if updated:
        messages.success(request, f"Deleted: {updated}")
    else:
        messages.info(request, "All selected ones are already deleted")


@admin.action(description="Restore selected")
def restore(modeladmin, request, queryset):
    updated = queryset.exclude(deletion_status=DeletionStatus.ACTIVE).update(deletion_status=DeletionStatus.ACTIVE)
    if updated:
        messages.success(request, f"Restored: {updated}")
    else:
        messages.info(request, "Nothing to restore among the selected ones")


@admin.register(Listing)
class ListingAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "owner", "city", "price", "property_type", "listing_type",
                    "is_active", "deletion_status", "created_at", "view_count", "unique_view_count")
    list_filter = ("is_active", "deletion_status", "property_type", "listing_type", "city", "created_at")
    search_fields = ("title", "description", "city", "owner__email", "owner__username")
    ordering = ("-created_at",)
    autocomplete_fields = ("owner",)  # AJAX search
    readonly_fields = ("created_at", "updated_at", "view_count", "unique_view_count", "last_viewed_at")
    fieldsets = (
        (None, {"fields": ("title", "description")}),
        ("Location", {"fields": ("location", "city", "district")}),
        ("Details", {"fields": ("price", "currency", "property_type", "listing_type", "is_active", "deletion_status")}),
        ("Statistics", {"fields": ("view_count", "unique_view_count", "last_viewed_at")}),
        ("Owner", {"fields": ("owner",)}),
        ("Meta", {"fields": ("created_at", "updated_at")}),
    )
    actions = [mark_deleted, restore]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("listing_stats", "owner")

    @admin.display(ordering="listing_stats__view_count", description="Views")
    def view_count(self, obj):
        return getattr(getattr(obj, "listing_stats", None), "view_count", 0)

    @admin.display(ordering="listing_stats__unique_view_count", description="Unique views")
    def unique_view_count(self, obj):
        return getattr(getattr(obj, "listing_stats", None), "unique_view_count", 0)

    @admin.display(description="Last viewed")
    def last_viewed_at(self, obj):
        return getattr(getattr(obj, "listing_stats", None), "last_viewed_at", None)
