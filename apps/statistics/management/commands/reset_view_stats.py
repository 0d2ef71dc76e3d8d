from django.core.management.base import BaseCommand

from apps.statistics.services import reset_view_statistics


class Command(BaseCommand):
    help = "Zero all listing view counters, viewer sets, view history and owners' lifetime views."

    def add_arguments(self, parser):
        parser.add_argument("--yes", action="store_true", help="do not ask for confirmation")

    def handle(self, *args, **opts):
        if not opts["yes"]:
            answer = input("This removes all view statistics. Type 'yes' to continue: ")
            if answer.strip().lower() != "yes":
                self.stdout.write(self.style.WARNING("Cancelled."))
                return
        result = reset_view_statistics()
        for key, value in result.items():
            self.stdout.write(f"{key}: {value}")
        self.stdout.write(self.style.SUCCESS("Done."))
