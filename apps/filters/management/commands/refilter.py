"""
Management command to re-drive a filter value cascade.

A rename or removal that failed halfway leaves some entities with the old
value. Running the same cascade again converges them; records that are
already migrated are not written.

Usage:
    python manage.py refilter --family places --group directions --from "Архыз" --to "Архыз (новый)"
    python manage.py refilter --family routes --group transport --from "Верхом"
"""

from django.core.management.base import BaseCommand, CommandError

from apps.filters.services import get_family, redrive_cascade, FilterFamilyNotFoundError


class Command(BaseCommand):
    help = 'Re-run a filter value rename/removal over entity records'

    def add_arguments(self, parser):
        parser.add_argument('--family', required=True, help='Entity family (places, routes)')
        parser.add_argument('--group', required=True, help='Fixed or extra group key')
        parser.add_argument('--from', dest='old_value', required=True, help='Value to replace')
        parser.add_argument('--to', dest='new_value', default=None, help='New value (omit to remove)')
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Count affected records without making changes',
        )

    def handle(self, *args, **options):
        try:
            family = get_family(options['family'])
        except FilterFamilyNotFoundError as e:
            raise CommandError(str(e))

        group_key = options['group']
        old_value = options['old_value']
        new_value = options['new_value']

        if options['dry_run']:
            count = self._count_affected(family, group_key, old_value)
            self.stdout.write(f'{count} record(s) still reference {old_value!r} in {group_key}')
            self.stdout.write(self.style.WARNING('--dry-run mode: No changes made.'))
            return

        result = redrive_cascade(
            family=family.name,
            group=group_key,
            old_value=old_value,
            new_value=new_value,
        )

        style = self.style.SUCCESS if not result.failed else self.style.ERROR
        self.stdout.write(style(
            f'Visited {result.visited}, updated {result.updated}, failed {result.failed}'
        ))

    def _count_affected(self, family, group_key, old_value):
        model = family.get_entity_model()
        group = family.get_group(group_key)

        if group is not None:
            if group.field is None:
                return 0
            if group.scalar:
                return model.objects.filter(**{group.field: old_value}).count()
            return sum(
                1 for values in model.objects.values_list(group.field, flat=True)
                if old_value in (values or [])
            )

        return sum(
            1 for custom in model.objects.values_list(family.custom_filters_field, flat=True)
            if isinstance(custom, dict) and old_value in (custom.get(group_key) or [])
        )
