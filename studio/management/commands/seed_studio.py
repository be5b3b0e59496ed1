from __future__ import annotations

from django.core.management.base import BaseCommand

from studio.seed import seed_studio


class Command(BaseCommand):
    help = "Seed default photography types and the site settings row (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--update-existing",
            action="store_true",
            help="Reset existing default types to the seed name and order.",
        )

    def handle(self, *args, **options):
        result = seed_studio(update_existing=options["update_existing"])
        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: created={result['created']} updated={result['updated']} "
                f"skipped={result['skipped']} settings_created={result['settings_created']}"
            )
        )
