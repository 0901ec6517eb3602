"""Cyrillic to Latin transliteration for deriving group keys from labels."""

import re

CYRILLIC_TO_LATIN = {
    'а': 'a', 'б': 'b', 'в': 'v', 'г': 'g', 'д': 'd', 'е': 'e', 'ё': 'e',
    'ж': 'zh', 'з': 'z', 'и': 'i', 'й': 'j', 'к': 'k', 'л': 'l', 'м': 'm',
    'н': 'n', 'о': 'o', 'п': 'p', 'р': 'r', 'с': 's', 'т': 't', 'у': 'u',
    'ф': 'f', 'х': 'h', 'ц': 'ts', 'ч': 'ch', 'ш': 'sh', 'щ': 'sch',
    'ъ': '', 'ы': 'y', 'ь': '', 'э': 'e', 'ю': 'yu', 'я': 'ya',
}

FALLBACK_KEY = 'group'

_ALLOWED = re.compile(r'[a-z0-9]')
_UNDERSCORES = re.compile(r'_+')


def slug_from_label(label) -> str:
    """
    Derive a group key from a human label.

    >>> slug_from_label('Тип жилья')
    'tip_zhilya'
    >>> slug_from_label('  !!! ')
    'group'
    """
    text = str(label or '').strip().lower()

    chars = []
    for char in text:
        if char in CYRILLIC_TO_LATIN:
            chars.append(CYRILLIC_TO_LATIN[char])
        elif _ALLOWED.fullmatch(char):
            chars.append(char)
        elif char.isspace() or char == '_':
            chars.append('_')

    slug = _UNDERSCORES.sub('_', ''.join(chars)).strip('_')
    return slug or FALLBACK_KEY
