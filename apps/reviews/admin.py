from django.contrib import admin
from .models import Review, ReviewStatus
from .services import update_entity_rating


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    """Admin interface for Reviews."""

    list_display = [
        'author_name',
        'entity_type',
        'entity_title',
        'rating',
        'status',
        'created_at'
    ]
    list_filter = [
        'status',
        'entity_type',
        'rating',
        'created_at'
    ]
    search_fields = [
        'author_name',
        'entity_title',
        'text'
    ]
    readonly_fields = ['entity_type', 'entity_id', 'entity_title', 'user', 'created_at', 'updated_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    actions = ['approve_reviews', 'reject_reviews']

    def _set_status(self, queryset, status):
        targets = set(queryset.values_list('entity_type', 'entity_id'))
        updated = queryset.update(status=status)
        for entity_type, entity_id in targets:
            update_entity_rating(entity_type=entity_type, entity_id=entity_id)
        return updated

    @admin.action(description='Approve selected reviews')
    def approve_reviews(self, request, queryset):
        updated = self._set_status(queryset, ReviewStatus.APPROVED)
        self.message_user(request, f'{updated} review(s) approved.')

    @admin.action(description='Reject selected reviews')
    def reject_reviews(self, request, queryset):
        updated = self._set_status(queryset, ReviewStatus.REJECTED)
        self.message_user(request, f'{updated} review(s) rejected.')
