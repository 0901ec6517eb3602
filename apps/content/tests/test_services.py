"""
Service layer tests for the content app.

Tests:
- Site content defaults, deep merge and validation
- News management and public listing
- Media storage (WebP transcoding, SVG, documents, videos)
- Feedback delivery
"""

import io
import uuid
from smtplib import SMTPException

import pytest
from django.core import mail
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from apps.content.models import Media, News, SiteContent
from apps.content.services import (
    deep_merge,
    get_section_content,
    update_section_content,
    get_footer_content,
    update_footer_content,
    get_page_content,
    update_page_content,
    list_public_news,
    get_public_news,
    create_news,
    update_news,
    delete_news,
    store_image,
    store_document,
    store_video,
    delete_media,
    send_feedback,
)
from apps.content.services.exceptions import (
    ContentValidationError,
    PageNotFoundError,
    NewsNotFoundError,
    MediaNotFoundError,
    MediaValidationError,
    FeedbackNotConfiguredError,
    FeedbackDeliveryError,
)
from apps.content.services.site_content import HOME_DEFAULT_CONTENT


class TestDeepMerge:

    def test_nested_objects_merge(self):
        base = {'hero': {'title': 'A', 'image': 'a.png'}, 'items': [1, 2]}

        merged = deep_merge(base, {'hero': {'title': 'B'}, 'items': [3]})

        assert merged == {'hero': {'title': 'B', 'image': 'a.png'}, 'items': [3]}
        assert base['hero']['title'] == 'A'

    def test_none_keeps_base(self):
        assert deep_merge({'title': 'A'}, {'title': None}) == {'title': 'A'}

    def test_object_replaces_scalar(self):
        assert deep_merge({'cta': 'none'}, {'cta': {'title': 'Go'}}) == {'cta': {'title': 'Go'}}


# ============================================================================
# SITE CONTENT
# ============================================================================

@pytest.mark.django_db
class TestSiteContent:

    def test_home_defaults_without_row(self):
        content = get_section_content(key='home')

        assert content == HOME_DEFAULT_CONTENT
        assert not SiteContent.objects.exists()

    def test_saved_content_merged_over_defaults(self):
        update_section_content(key='home', content={'routesTitle': 'Тропы', 'banners': [{'id': 'b1'}]})

        content = get_section_content(key='home')

        assert content['routesTitle'] == 'Тропы'
        assert content['banners'] == [{'id': 'b1'}]
        assert content['placesTitle'] == HOME_DEFAULT_CONTENT['placesTitle']
        assert SiteContent.objects.get(key='home').content == {
            'routesTitle': 'Тропы', 'banners': [{'id': 'b1'}],
        }

    def test_region_hero_partial_override(self):
        update_section_content(key='region', content={'hero': {'title': 'KCR'}})

        hero = get_section_content(key='region')['hero']

        assert hero['title'] == 'KCR'
        assert hero['image'] == '/full_roates_bg.jpg'

    def test_unknown_section(self):
        with pytest.raises(PageNotFoundError):
            get_section_content(key='about')

    def test_non_object_rejected(self):
        with pytest.raises(ContentValidationError):
            update_section_content(key='home', content=['not', 'an', 'object'])

    def test_footer_skeleton_and_replace(self):
        assert get_footer_content()['right']['formRecipientEmail'] == ''

        saved = update_footer_content(content={'left': {'phone': '+7 878 000'}})

        # No defaults are merged into the footer
        assert saved == {'left': {'phone': '+7 878 000'}}

    def test_page_content(self):
        assert get_page_content(page_name='news')['hero']['title'] == 'НОВОСТИ'

        content = update_page_content(page_name='places', content={'hero': {'description': 'Новое'}})

        assert content['hero']['description'] == 'Новое'
        assert content['hero']['title'] == 'ИНТЕРЕСНЫЕ МЕСТА'
        assert SiteContent.objects.filter(key='page:places').exists()

    def test_unknown_page(self):
        with pytest.raises(PageNotFoundError):
            get_page_content(page_name='contacts')
        with pytest.raises(PageNotFoundError):
            update_page_content(page_name='contacts', content={})
        assert not SiteContent.objects.exists()


# ============================================================================
# NEWS
# ============================================================================

@pytest.mark.django_db
class TestNews:

    def test_create_generates_slug(self):
        news = create_news(data={'title': 'Новый подъёмник', 'type': 'article'})

        assert news.slug.startswith('novyy-podyomnik-')
        assert news.type == 'article'

    def test_create_requires_title(self):
        with pytest.raises(ContentValidationError):
            create_news(data={'title': ' '})

    def test_create_invalid_type(self):
        with pytest.raises(ContentValidationError):
            create_news(data={'title': 'X', 'type': 'blog'})

    def test_update_title_changes_slug(self, festival_news):
        news = update_news(news_id=festival_news.id, data={'title': 'Festival moved'})

        assert news.slug.startswith('festival-moved-')
        assert news.category == 'События'

    def test_update_missing(self):
        with pytest.raises(NewsNotFoundError):
            update_news(news_id=uuid.uuid4(), data={'title': 'X'})

    def test_delete(self, festival_news):
        delete_news(news_id=festival_news.id)

        assert not News.objects.filter(pk=festival_news.pk).exists()
        with pytest.raises(NewsNotFoundError):
            delete_news(news_id=festival_news.id)

    def test_public_list_defaults_to_news(self, festival_news, road_news, guide_article, draft_news):
        assert list(list_public_news()) == [road_news, festival_news]
        assert list(list_public_news(news_type='article')) == [guide_article]
        assert list(list_public_news(news_type='anything')) == [road_news, festival_news]

    def test_public_list_category_and_search(self, festival_news, road_news):
        assert list(list_public_news(category='Дороги')) == [road_news]
        assert list(list_public_news(search='observatory')) == [festival_news]

    def test_public_lookup(self, festival_news, draft_news):
        assert get_public_news(id_or_slug=str(festival_news.id)) == festival_news
        assert get_public_news(id_or_slug='arkhyz-music-festival') == festival_news
        with pytest.raises(NewsNotFoundError):
            get_public_news(id_or_slug='draft')

    def test_cover_fallback(self, guide_article, festival_news):
        assert guide_article.cover == '/uploads/checklist.webp'
        assert festival_news.cover is None


# ============================================================================
# MEDIA
# ============================================================================

@pytest.mark.django_db
class TestMedia:

    def test_raster_converted_to_webp(self, media_root, jpeg_upload):
        media = store_image(upload=jpeg_upload)

        assert media.mimetype == 'image/webp'
        assert media.filename.endswith('.webp')
        assert media.url == f'/uploads/{media.filename}'
        with Image.open(media_root / media.filename) as stored:
            assert stored.format == 'WEBP'
            assert stored.size == (16, 12)

    def test_alpha_preserved(self, media_root, png_alpha_upload):
        media = store_image(upload=png_alpha_upload)

        with Image.open(media_root / media.filename) as stored:
            assert stored.mode == 'RGBA'

    def test_palette_image_converted(self, media_root):
        buffer = io.BytesIO()
        Image.new('P', (4, 4)).save(buffer, 'GIF')
        upload = SimpleUploadedFile('anim.gif', buffer.getvalue(), content_type='image/gif')

        media = store_image(upload=upload)

        assert media.mimetype == 'image/webp'

    def test_svg_kept(self, media_root, svg_upload):
        media = store_image(upload=svg_upload)

        assert media.mimetype == 'image/svg+xml'
        assert media.filename.endswith('.svg')
        assert (media_root / media.filename).read_bytes().startswith(b'<svg')

    def test_image_type_rejected(self, media_root, pdf_upload):
        with pytest.raises(MediaValidationError):
            store_image(upload=pdf_upload)
        assert not Media.objects.exists()

    def test_corrupt_image_rejected(self, media_root):
        upload = SimpleUploadedFile('broken.png', b'not an image', content_type='image/png')

        with pytest.raises(MediaValidationError):
            store_image(upload=upload)

    def test_image_too_large(self, settings, media_root, jpeg_upload):
        settings.MEDIA_IMAGE_MAX_BYTES = 10

        with pytest.raises(MediaValidationError) as exc:
            store_image(upload=jpeg_upload)

        assert 'too large' in str(exc.value)

    def test_document_stored_unchanged(self, media_root, pdf_upload):
        media = store_document(upload=pdf_upload)

        assert media.filename.endswith('.pdf')
        assert media.size == len(b'%PDF-1.4\n%%EOF\n')
        assert (media_root / media.filename).read_bytes() == b'%PDF-1.4\n%%EOF\n'

    def test_document_type_rejected(self, media_root, jpeg_upload):
        with pytest.raises(MediaValidationError):
            store_document(upload=jpeg_upload)

    def test_video_keeps_known_extension(self, media_root, video_upload):
        media = store_video(upload=video_upload)

        assert media.filename.endswith('.mov')
        assert media.mimetype == 'video/quicktime'

    def test_video_unknown_extension_becomes_mp4(self, media_root):
        upload = SimpleUploadedFile('clip.bin', b'\x00\x01', content_type='video/mp4')

        assert store_video(upload=upload).filename.endswith('.mp4')

    def test_delete_removes_file(self, media_root, pdf_upload):
        media = store_document(upload=pdf_upload)

        delete_media(media_id=media.id)

        assert not (media_root / media.filename).exists()
        assert not Media.objects.exists()

    def test_delete_with_missing_file(self, media_root, pdf_upload):
        media = store_document(upload=pdf_upload)
        (media_root / media.filename).unlink()

        delete_media(media_id=media.id)

        assert not Media.objects.exists()

    def test_delete_missing_record(self, db):
        with pytest.raises(MediaNotFoundError):
            delete_media(media_id=uuid.uuid4())


# ============================================================================
# FEEDBACK
# ============================================================================

@pytest.mark.django_db
class TestFeedback:

    @pytest.fixture
    def recipient(self):
        update_footer_content(content={'right': {'formRecipientEmail': 'tourism@example.com'}})

    def test_sends_email(self, recipient):
        send_feedback(name='Ivan', email='ivan@example.com', text='Hello\n<b>there</b>')

        assert len(mail.outbox) == 1
        message = mail.outbox[0]
        assert message.to == ['tourism@example.com']
        assert message.reply_to == ['ivan@example.com']
        assert message.subject == 'Обратная связь: Ivan'
        html, mimetype = message.alternatives[0]
        assert mimetype == 'text/html'
        assert '&lt;b&gt;there&lt;/b&gt;' in html

    def test_subject_name_truncated(self, recipient):
        send_feedback(name='N' * 80, email='n@example.com', text='Hi')

        assert mail.outbox[0].subject == 'Обратная связь: ' + 'N' * 50

    def test_blank_fields(self, recipient):
        with pytest.raises(ContentValidationError):
            send_feedback(name='Ivan', email='ivan@example.com', text='   ')
        assert mail.outbox == []

    def test_not_configured(self):
        with pytest.raises(FeedbackNotConfiguredError):
            send_feedback(name='Ivan', email='ivan@example.com', text='Hi')

    def test_delivery_failure(self, recipient, monkeypatch):
        def fail(self, *args, **kwargs):
            raise SMTPException('connection refused')

        monkeypatch.setattr('django.core.mail.EmailMultiAlternatives.send', fail)

        with pytest.raises(FeedbackDeliveryError):
            send_feedback(name='Ivan', email='ivan@example.com', text='Hi')
