from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from django.db import transaction

from apps.core.seed_data import USERS, DEFAULT_PASSWORD

User = get_user_model()


class Command(BaseCommand):
    help = "Seed demo users for every role (user, agent, agency, superadmin)"

    def handle(self, *args, **options):
        created = 0
        for data in USERS:
            with transaction.atomic():
                user, was_created = User.objects.get_or_create(
                    email=data["email"],
                    defaults={
                        "username": data["username"],
                        "first_name": data.get("first_name", ""),
                        "last_name": data.get("last_name", ""),
                        "role": data["role"],
                    },
                )
                if was_created:
                    user.set_password(DEFAULT_PASSWORD)
                    user.save(update_fields=["password"])
                    created += 1
                    self.stdout.write(self.style.SUCCESS(f"[OK] {data['email']} ({data['role']}) created"))
                elif user.role != data["role"]:
                    user.role = data["role"]
                    user.save(update_fields=["role"])
                    self.stdout.write(self.style.WARNING(f"[ROLE] {data['email']} -> {data['role']}"))
                else:
                    self.stdout.write(self.style.WARNING(f"[SKIP] {data['email']} already there"))

        self.stdout.write(self.style.SUCCESS(f"Done. Created Users: {created}/{len(USERS)}"))
