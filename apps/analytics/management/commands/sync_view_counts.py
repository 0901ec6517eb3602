"""
Management command to resync unique view counters.

Counters are bumped on every first view; if a bump was lost the stored
number drifts from the tracking table. This recomputes every
``unique_views_count`` from ``ViewTracking``.

Usage:
    python manage.py sync_view_counts --dry-run
    python manage.py sync_view_counts
"""

from django.core.management.base import BaseCommand

from apps.analytics.services import recompute_view_counts


class Command(BaseCommand):
    help = 'Recompute unique view counters from view tracking'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be changed without making changes',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        changes = recompute_view_counts(dry_run=dry_run)

        for entity_type, pk, stored, actual in changes:
            self.stdout.write(f'  {entity_type} {pk}: {stored} -> {actual}')

        self.stdout.write(self.style.SUCCESS(f'{len(changes)} counter(s) out of sync'))
        if dry_run:
            self.stdout.write(self.style.WARNING('--dry-run mode: No changes made.'))
