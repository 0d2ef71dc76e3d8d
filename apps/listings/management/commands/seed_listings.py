import random

from faker import Faker
from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model

from apps.core.enums import PropertyTypes, ListingTypes, Roles
from apps.listings.models import Listing

User = get_user_model()


class Command(BaseCommand):
    help = "Create random listings owned by agent/agency users."

    def add_arguments(self, parser):
        parser.add_argument("--count", type=int, default=20, help="number of listings")

    def handle(self, *args, **options):
        fake = Faker("en_US")
        agents = list(User.objects.filter(role__in=[Roles.AGENT, Roles.AGENCY]))
        if not agents:
            raise CommandError("Not found agent users, run seed_users first")

        for _ in range(options["count"]):
            owner = random.choice(agents)
            city = fake.city()
            street = fake.street_name()
            Listing.objects.create(
                owner=owner,
                title=f"{fake.word().capitalize()} {random.choice(['Villa', 'House', 'Apartment'])}",
                description=fake.paragraph(nb_sentences=3),
                location=f"{city}, {street}",
                city=city,
                district=fake.city_suffix(),
                price=random.randint(10_000, 900_000),
                property_type=random.choice(PropertyTypes.values),
                listing_type=random.choice(ListingTypes.values),
                is_active=random.random() > 0.1,
            )
        self.stdout.write(self.style.SUCCESS(f"Done. Created listings: {options['count']}"))
