"""
Content services - Business logic layer.

This package contains all business operations for the content app:
- News and articles
- Site content documents (home, region, footer, page headers)
- Media library uploads
- Footer feedback form
"""

from .news_management import (
    list_news,
    list_public_news,
    get_news_by_id,
    get_public_news,
    create_news,
    update_news,
    delete_news,
)
from .site_content import (
    deep_merge,
    get_section_content,
    update_section_content,
    get_footer_content,
    update_footer_content,
    get_page_content,
    update_page_content,
    HOME_KEY,
    REGION_KEY,
)
from .media import (
    store_image,
    store_document,
    store_video,
    list_media,
    delete_media,
)
from .feedback import (
    send_feedback,
    get_feedback_recipient,
)

# Domain Exceptions
from .exceptions import (
    ContentServiceError,
    ContentValidationError,
    NewsNotFoundError,
    PageNotFoundError,
    MediaNotFoundError,
    MediaValidationError,
    FeedbackNotConfiguredError,
    FeedbackDeliveryError,
)

__all__ = [
    # News
    'list_news',
    'list_public_news',
    'get_news_by_id',
    'get_public_news',
    'create_news',
    'update_news',
    'delete_news',
    # Site Content
    'deep_merge',
    'get_section_content',
    'update_section_content',
    'get_footer_content',
    'update_footer_content',
    'get_page_content',
    'update_page_content',
    'HOME_KEY',
    'REGION_KEY',
    # Media
    'store_image',
    'store_document',
    'store_video',
    'list_media',
    'delete_media',
    # Feedback
    'send_feedback',
    'get_feedback_recipient',
    # Exceptions
    'ContentServiceError',
    'ContentValidationError',
    'NewsNotFoundError',
    'PageNotFoundError',
    'MediaNotFoundError',
    'MediaValidationError',
    'FeedbackNotConfiguredError',
    'FeedbackDeliveryError',
]
