"""
Site content service - editable JSON documents behind site sections.

Home, region and the listing page headers ship with default content; what
an administrator saves is deep-merged over those defaults when read, so a
partially filled document still renders every block. The footer has no
defaults: it is returned as saved, or as an empty skeleton.
"""

import copy
import logging
from typing import Any, Dict

from apps.content.models import SiteContent
from .exceptions import ContentValidationError, PageNotFoundError

logger = logging.getLogger(__name__)

HOME_KEY = 'home'
REGION_KEY = 'region'
FOOTER_KEY = 'footer'
PAGE_KEY_PREFIX = 'page:'

HOME_DEFAULT_CONTENT = {
    'routesTitle': 'Маршруты',
    'routesButtonLink': '/routes',
    'seasons': [
        {
            'title': 'Зима',
            'bgColor': '#73BFE7',
            'patternColor': '#296587',
            'logo': 'logoPattern1.png',
            'routeLink': '/routes?seasons=Зима',
        },
        {
            'title': 'Весна',
            'bgColor': '#FF9397',
            'patternColor': '#DB224A',
            'logo': 'logoPattern2.png',
            'routeLink': '/routes?seasons=Весна',
        },
        {
            'title': 'Лето',
            'bgColor': '#66D7CA',
            'patternColor': '#156A60',
            'logo': 'logoPattern3.png',
            'routeLink': '/routes?seasons=Лето',
        },
        {
            'title': 'Осень',
            'bgColor': '#CD8A67',
            'patternColor': '#7C4B42',
            'logo': 'logoPattern4.png',
            'routeLink': '/routes?seasons=Осень',
        },
    ],
    'firstTimeTitle': 'ВПЕРВЫЕ В КЧР?',
    'firstTimeDesc': (
        'Специально для вас мы создали раздел, в котором собрали всю полезную информацию, '
        'чтобы помочь сделать ваше путешествие по нашей удивительной республике комфортным, '
        'интересным и незабываемым!'
    ),
    'firstTimeArticles': [],
    'servicesTitle': 'СЕРВИС И УСЛУГИ',
    'servicesButtonLink': '/services',
    'servicesCardsLimit': 8,
    'placesTitle': 'КУДА ПОЕХАТЬ?',
    'placesButtonLink': '/places',
    'placesItems': [],
    'backgroundImage': '/mountainBG.png',
    'sliderPlaces': [],
    # [{id, image, link, isActive, isPermanent}]
    'banners': [],
}

REGION_DEFAULT_CONTENT = {
    'hero': {
        'title': 'КАРАЧАЕВО-ЧЕРКЕСИЯ',
        'subtitle': 'Край величественных гор, древних традиций и гостеприимных народов',
        'image': '/full_roates_bg.jpg',
        'buttonText': 'Исследовать маршруты',
        'buttonLink': '/routes',
    },
    'intro': {
        'title': 'Добро пожаловать в КЧР',
        'content': (
            '<p>Карачаево-Черкесская Республика расположена на северных склонах '
            'Главного Кавказского хребта. Здесь находятся курорты Домбай и Архыз.</p>'
        ),
        'image': '/slider1.png',
    },
    'facts': [
        {'number': '14 277', 'label': 'км²', 'description': 'Площадь региона'},
        {'number': '466 000', 'label': 'чел.', 'description': 'Население'},
        {'number': '80+', 'label': '', 'description': 'Народностей'},
        {'number': '4 046', 'label': 'м', 'description': 'Высота Домбай-Ульген'},
    ],
    'history': {
        'intro': 'История Карачаево-Черкесии насчитывает тысячелетия.',
        'timeline': [
            {
                'year': 'I-II век н.э.',
                'title': 'Аланское царство',
                'description': 'Формирование аланского государства.',
            },
            {
                'year': '1922',
                'title': 'Образование автономии',
                'description': 'Создание Карачаево-Черкесской автономной области.',
            },
            {
                'year': '1992',
                'title': 'Современная республика',
                'description': 'Карачаево-Черкесия получает статус республики.',
            },
        ],
    },
    'nature': {
        'title': 'Природа и география',
        'cards': [
            {
                'title': 'Горные вершины',
                'description': 'Главный Кавказский хребет с вершинами свыше 4000 метров.',
                'image': '/slider2.png',
            },
            {
                'title': 'Горные озёра',
                'description': 'Более 130 высокогорных озёр с кристально чистой водой.',
                'image': '/slider3.png',
            },
        ],
    },
    'culture': {
        'title': 'Народы и культура',
        'intro': 'Многонациональная республика, где веками живут в мире разные народы.',
        'items': [
            {'name': 'Карачаевцы', 'description': 'Тюркоязычный народ, потомки алан.'},
            {'name': 'Черкесы', 'description': 'Адыгский народ с богатой воинской историей.'},
            {'name': 'Абазины', 'description': 'Древний народ Кавказа, родственный абхазам.'},
            {'name': 'Ногайцы', 'description': 'Тюркский народ со степной культурой.'},
        ],
    },
    'places': {
        'title': 'Достопримечательности',
        'items': [
            {'place': 'Домбай', 'title': 'Горнолыжный курорт Домбай', 'desc': '', 'image': ''},
            {'place': 'Архыз', 'title': 'Курорт Архыз', 'desc': '', 'image': ''},
        ],
        'moreButtonText': 'Смотреть все места',
        'moreButtonLink': '/places',
    },
    'cta': {
        'title': 'Готовы к путешествию?',
        'text': 'Откройте для себя красоту Карачаево-Черкесии.',
        'primaryButtonText': 'Выбрать маршрут',
        'primaryButtonLink': '/routes',
        'secondaryButtonText': 'Найти гида',
        'secondaryButtonLink': '/services',
    },
}

FOOTER_EMPTY_CONTENT = {
    'left': {'logo': '', 'social': [], 'phone': '', 'address': ''},
    'center': {'title': '', 'links': []},
    'right': {
        'title': '',
        'formPlaceholderName': '',
        'formPlaceholderEmail': '',
        'formPlaceholderText': '',
        'formButtonText': '',
        'formRecipientEmail': '',
    },
    'bottom': {'orgName': '', 'links': [], 'partners': []},
}

PAGE_DEFAULT_CONTENT = {
    'routes': {
        'hero': {
            'title': 'МАРШРУТЫ',
            'description': 'Наши маршруты созданы для самостоятельного прохождения.',
            'image': '/full_roates_bg.jpg',
        },
    },
    'places': {
        'hero': {
            'title': 'ИНТЕРЕСНЫЕ МЕСТА',
            'description': 'Создайте свой уникальный маршрут!',
            'image': '/full_places_bg.jpg',
        },
    },
    'news': {
        'hero': {
            'title': 'НОВОСТИ',
            'description': 'Актуальные новости о туризме, событиях и интересных местах Карачаево-Черкесии',
            'image': '/newBG.png',
        },
    },
    'services': {
        'hero': {
            'title': 'УСЛУГИ И СЕРВИСЫ',
            'description': 'Найдите надёжных гидов, прокат снаряжения и другие услуги.',
            'image': '/full_roates_bg.jpg',
        },
    },
}

SECTION_DEFAULTS = {
    HOME_KEY: HOME_DEFAULT_CONTENT,
    REGION_KEY: REGION_DEFAULT_CONTENT,
}


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge ``override`` into a copy of ``base``.

    Nested objects merge key by key; lists and scalars from ``override``
    replace the base value.

    >>> deep_merge({'hero': {'title': 'A', 'image': 'a.png'}}, {'hero': {'title': 'B'}})
    {'hero': {'title': 'B', 'image': 'a.png'}}
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict):
            current = merged.get(key)
            merged[key] = deep_merge(current if isinstance(current, dict) else {}, value)
        elif value is not None:
            merged[key] = copy.deepcopy(value)
    return merged


def _stored(key: str):
    row = SiteContent.objects.filter(key=key).first()
    if row is not None and isinstance(row.content, dict):
        return row.content
    return None


def _with_defaults(key: str, defaults: Dict[str, Any]) -> Dict[str, Any]:
    stored = _stored(key)
    return deep_merge(defaults, stored) if stored is not None else copy.deepcopy(defaults)


def _save(key: str, content) -> None:
    if not isinstance(content, dict):
        raise ContentValidationError("Content must be an object")
    SiteContent.objects.update_or_create(key=key, defaults={'content': content})
    logger.info("Saved site content '%s'", key)


def get_section_content(*, key: str) -> Dict[str, Any]:
    """
    Content of the home or region section, merged over its defaults.

    Raises:
        PageNotFoundError: If the section is unknown
    """
    if key not in SECTION_DEFAULTS:
        raise PageNotFoundError(f"Unknown section '{key}'")
    return _with_defaults(key, SECTION_DEFAULTS[key])


def update_section_content(*, key: str, content) -> Dict[str, Any]:
    """
    Replace the saved home or region document.

    Args:
        key: 'home' or 'region'
        content: New document; must be an object

    Returns:
        The saved document merged over the defaults

    Raises:
        PageNotFoundError: If the section is unknown
        ContentValidationError: If content is not an object
    """
    if key not in SECTION_DEFAULTS:
        raise PageNotFoundError(f"Unknown section '{key}'")
    _save(key, content)
    return get_section_content(key=key)


def get_footer_content() -> Dict[str, Any]:
    """Saved footer, or the empty skeleton when nothing was saved."""
    stored = _stored(FOOTER_KEY)
    return stored if stored is not None else copy.deepcopy(FOOTER_EMPTY_CONTENT)


def update_footer_content(*, content) -> Dict[str, Any]:
    """
    Replace the footer document.

    Raises:
        ContentValidationError: If content is not an object
    """
    _save(FOOTER_KEY, content)
    return get_footer_content()


def _page_defaults(page_name: str) -> Dict[str, Any]:
    try:
        return PAGE_DEFAULT_CONTENT[page_name]
    except KeyError:
        raise PageNotFoundError(f"Page '{page_name}' not found")


def get_page_content(*, page_name: str) -> Dict[str, Any]:
    """
    Header content of a listing page (routes, places, news or services).

    Raises:
        PageNotFoundError: If the page has no content section
    """
    return _with_defaults(f"{PAGE_KEY_PREFIX}{page_name}", _page_defaults(page_name))


def update_page_content(*, page_name: str, content) -> Dict[str, Any]:
    """
    Replace a listing page's saved document.

    Raises:
        PageNotFoundError: If the page has no content section
        ContentValidationError: If content is not an object
    """
    _page_defaults(page_name)
    _save(f"{PAGE_KEY_PREFIX}{page_name}", content)
    return get_page_content(page_name=page_name)
