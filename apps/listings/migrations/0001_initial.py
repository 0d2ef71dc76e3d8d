import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Listing",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("title", models.CharField(max_length=120, verbose_name="Title")),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                ("location", models.CharField(max_length=255, verbose_name="Location")),
                ("city", models.CharField(blank=True, max_length=100, verbose_name="City")),
                ("district", models.CharField(blank=True, max_length=100, verbose_name="District")),
                ("price", models.DecimalField(decimal_places=2, default=0, max_digits=12, verbose_name="Price")),
                ("currency", models.CharField(default="USD", max_length=3, verbose_name="Currency")),
                ("property_type", models.CharField(choices=[("villa", "Villa"), ("house", "House"), ("apartment", "Apartment"), ("land", "Land"), ("commercial", "Commercial"), ("other", "Other")], default="apartment", max_length=20, verbose_name="Property type")),
                ("listing_type", models.CharField(choices=[("sale", "Sale"), ("rent", "Rent")], default="sale", max_length=10, verbose_name="Listing type")),
                ("is_active", models.BooleanField(default=True, verbose_name="Is active")),
                ("deletion_status", models.CharField(choices=[("active", "Active"), ("pending_deletion", "Pending deletion"), ("deleted", "Deleted")], db_index=True, default="active", max_length=20, verbose_name="Deletion status")),
                ("owner", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="listings", to=settings.AUTH_USER_MODEL, verbose_name="Owner")),
            ],
            options={
                "verbose_name": "Listing",
                "verbose_name_plural": "Listings",
                "indexes": [models.Index(fields=["owner", "deletion_status", "-created_at"], name="listing_owner_status_idx")],
            },
        ),
    ]
