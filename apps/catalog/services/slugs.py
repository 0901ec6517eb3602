"""URL slugs for catalog and news records."""

import re
import time

SLUG_TRANSLITERATION = {
    'а': 'a', 'б': 'b', 'в': 'v', 'г': 'g', 'д': 'd', 'е': 'e', 'ё': 'yo',
    'ж': 'zh', 'з': 'z', 'и': 'i', 'й': 'y', 'к': 'k', 'л': 'l', 'м': 'm',
    'н': 'n', 'о': 'o', 'п': 'p', 'р': 'r', 'с': 's', 'т': 't', 'у': 'u',
    'ф': 'f', 'х': 'h', 'ц': 'ts', 'ч': 'ch', 'ш': 'sh', 'щ': 'sch', 'ъ': '',
    'ы': 'y', 'ь': '', 'э': 'e', 'ю': 'yu', 'я': 'ya',
}


def slugify_title(title: str) -> str:
    """
    Lowercase, transliterate and hyphenate a title.

    >>> slugify_title('Озеро Ак-Кёль')
    'ozero-ak-kyol'
    """
    text = ''.join(SLUG_TRANSLITERATION.get(char, char) for char in (title or '').lower())
    text = re.sub(r'[^a-z0-9]+', '-', text)
    return text.strip('-')


def generate_slug(title: str) -> str:
    """Slug with a millisecond timestamp suffix, unique in practice."""
    base = slugify_title(title)
    suffix = str(int(time.time() * 1000))
    return f"{base}-{suffix}" if base else suffix


def generate_unique_slug(model, title: str, exclude_pk=None) -> str:
    """``generate_slug`` with a counter appended until ``model`` has no clash."""
    slug = generate_slug(title)
    queryset = model.objects.all()
    if exclude_pk is not None:
        queryset = queryset.exclude(pk=exclude_pk)

    candidate = slug
    counter = 2
    while queryset.filter(slug=candidate).exists():
        candidate = f"{slug}-{counter}"
        counter += 1
    return candidate
