import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("listings", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ListingStats",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("listing", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, primary_key=True, related_name="listing_stats", serialize=False, to="listings.listing", verbose_name="Listing")),
                ("view_count", models.PositiveIntegerField(default=0, verbose_name="Views count")),
                ("unique_view_count", models.PositiveIntegerField(default=0, verbose_name="Unique views count")),
                ("last_viewed_at", models.DateTimeField(blank=True, null=True, verbose_name="Last viewed at")),
                ("owner_view_count", models.PositiveIntegerField(default=0, verbose_name="Owner views")),
                ("last_owner_view_at", models.DateTimeField(blank=True, null=True, verbose_name="Last owner view")),
                ("excessive_views", models.PositiveIntegerField(default=0, verbose_name="Excessive views")),
                ("flagged_at", models.DateTimeField(blank=True, null=True, verbose_name="Flagged at")),
                ("flag_reason", models.CharField(blank=True, max_length=120, verbose_name="Flag reason")),
            ],
            options={
                "verbose_name": "Listing stats",
                "verbose_name_plural": "Listing stats",
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("unique_view_count__lte", models.F("view_count"))), name="stats_unique_lte_total"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ListingViewer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("viewer_type", models.CharField(choices=[("account", "Authenticated"), ("anonymous", "Anonymous")], max_length=10, verbose_name="Viewer type")),
                ("viewer_key", models.CharField(max_length=80, verbose_name="Viewer key")),
                ("session_id", models.CharField(blank=True, max_length=64, verbose_name="Session ID")),
                ("views_count", models.PositiveIntegerField(default=0, verbose_name="Views count")),
                ("window_views", models.PositiveIntegerField(default=0, verbose_name="Views in abuse window")),
                ("window_started_at", models.DateTimeField(blank=True, null=True, verbose_name="Abuse window start")),
                ("last_viewed_at", models.DateTimeField(blank=True, null=True, verbose_name="Last viewed at")),
                ("listing", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="viewers", to="listings.listing", verbose_name="Listing")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="viewed_listings", to=settings.AUTH_USER_MODEL, verbose_name="User")),
            ],
            options={
                "verbose_name": "Listing viewer",
                "verbose_name_plural": "Listing viewers",
                "constraints": [
                    models.UniqueConstraint(fields=("listing", "viewer_key"), name="unique_listing_viewer"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ListingView",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("session_id", models.CharField(blank=True, max_length=64, verbose_name="Session ID")),
                ("viewer_type", models.CharField(choices=[("account", "Authenticated"), ("anonymous", "Anonymous"), ("owner", "Owner")], max_length=10, verbose_name="Viewer type")),
                ("is_unique", models.BooleanField(default=False, verbose_name="Unique view")),
                ("listing", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="stats_views", to="listings.listing", verbose_name="Listing")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL, verbose_name="User")),
            ],
            options={
                "verbose_name": "Listing view",
                "verbose_name_plural": "Listing views",
                "indexes": [models.Index(fields=["listing", "-created_at"], name="listing_view_recent_idx")],
            },
        ),
    ]
