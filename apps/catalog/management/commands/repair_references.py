"""
Management command to restore mirrored reference lists.

Adds the reciprocal entries a failed sync left out: places listed as nearby
get the owner back in their own list, guides listed on a route get the
route in ``route_ids``. Dangling ids are reported, never removed.

Usage:
    python manage.py repair_references --dry-run
    python manage.py repair_references
"""

from django.core.management.base import BaseCommand

from apps.catalog.services import repair_nearby_places, repair_route_guides


class Command(BaseCommand):
    help = 'Re-apply nearby place and route guide mirrors'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be fixed without making changes',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']

        for label, repair in (('Nearby places', repair_nearby_places), ('Route guides', repair_route_guides)):
            report = repair(dry_run=dry_run)

            for mirror_id, owner_id in report.fixed:
                self.stdout.write(f'  {label}: add {owner_id} to {mirror_id}')
            for owner_id, missing_id in report.dangling:
                self.stdout.write(self.style.WARNING(f'  {label}: {owner_id} references missing {missing_id}'))
            for owner_id, ref_id in report.skipped:
                self.stdout.write(self.style.WARNING(f'  {label}: {ref_id} on {owner_id} is not a guide'))

            self.stdout.write(self.style.SUCCESS(
                f'{label}: {len(report.fixed)} fixed, {len(report.dangling)} dangling'
            ))

        if dry_run:
            self.stdout.write(self.style.WARNING('--dry-run mode: No changes made.'))
