"""News and article management service."""

import logging
import uuid
from typing import Any, Dict, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.catalog.services.slugs import generate_unique_slug
from apps.content.models import News, NewsType
from .exceptions import ContentValidationError, NewsNotFoundError

logger = logging.getLogger(__name__)

NEWS_FIELDS = (
    'title', 'type', 'category', 'short_description', 'content', 'author',
    'image', 'preview', 'images', 'published_at', 'is_active',
)


def _clean_news_data(data: Dict[str, Any]) -> Dict[str, Any]:
    cleaned = {field: value for field, value in data.items() if field in NEWS_FIELDS}
    if 'type' in cleaned and cleaned['type'] not in NewsType.values:
        raise ContentValidationError(
            f"Invalid type: '{cleaned['type']}'. Valid options: {', '.join(NewsType.values)}"
        )
    if 'images' in cleaned and cleaned['images'] is None:
        cleaned['images'] = []
    return cleaned


def list_news(*, search: Optional[str] = None) -> QuerySet:
    """All news and articles for the admin panel, newest first."""
    queryset = News.objects.order_by('-created_at')
    search = (search or '').strip()
    if search:
        queryset = queryset.filter(Q(title__icontains=search) | Q(content__icontains=search))
    return queryset


def list_public_news(
    *,
    news_type: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None
) -> QuerySet:
    """
    Active items of one type, latest publication first.

    Args:
        news_type: 'article' for articles; anything else lists news
        category: Optional exact category
        search: Substring over title and short description

    Returns:
        QuerySet of News
    """
    queryset = News.objects.filter(
        is_active=True,
        type=NewsType.ARTICLE if news_type == NewsType.ARTICLE else NewsType.NEWS,
    )
    if category:
        queryset = queryset.filter(category=category)

    search = (search or '').strip()
    if search:
        queryset = queryset.filter(
            Q(title__icontains=search) | Q(short_description__icontains=search)
        )
    return queryset.order_by('-published_at', '-created_at')


def get_news_by_id(*, news_id: UUID) -> News:
    """
    Get news item by id, active or not.

    Raises:
        NewsNotFoundError: If news item doesn't exist
    """
    try:
        return News.objects.get(id=news_id)
    except News.DoesNotExist:
        raise NewsNotFoundError("News not found")


def get_public_news(*, id_or_slug: str) -> News:
    """
    Active news item or article by id or slug.

    Raises:
        NewsNotFoundError: If no active item matches
    """
    try:
        lookup = {'id': uuid.UUID(str(id_or_slug))}
    except ValueError:
        lookup = {'slug': id_or_slug}

    news = News.objects.filter(is_active=True, **lookup).first()
    if news is None:
        raise NewsNotFoundError("News or article not found")
    return news


def create_news(*, data: Dict[str, Any]) -> News:
    """
    Create a news item or article.

    Raises:
        ContentValidationError: If title is missing or type is invalid
    """
    title = (data.get('title') or '').strip()
    if not title:
        raise ContentValidationError("Title is required")

    fields = _clean_news_data(data)
    fields['title'] = title
    news = News.objects.create(slug=generate_unique_slug(News, title), **fields)
    logger.info("Created %s %s (%s)", news.type, news.id, news.slug)
    return news


@transaction.atomic
def update_news(*, news_id: UUID, data: Dict[str, Any]) -> News:
    """
    Partially update a news item; a new title regenerates the slug.

    Raises:
        NewsNotFoundError: If news item doesn't exist
        ContentValidationError: If title is blank or type is invalid
    """
    try:
        news = News.objects.select_for_update().get(id=news_id)
    except News.DoesNotExist:
        raise NewsNotFoundError("News not found")

    fields = _clean_news_data(data)
    if 'title' in fields:
        fields['title'] = (fields['title'] or '').strip()
        if not fields['title']:
            raise ContentValidationError("Title cannot be empty")
        if fields['title'] != news.title:
            news.slug = generate_unique_slug(News, fields['title'], exclude_pk=news.pk)

    for field, value in fields.items():
        setattr(news, field, value)
    news.save()
    return news


def delete_news(*, news_id: UUID) -> None:
    """
    Delete a news item.

    Raises:
        NewsNotFoundError: If news item doesn't exist
    """
    deleted, _ = News.objects.filter(id=news_id).delete()
    if not deleted:
        raise NewsNotFoundError("News not found")
