from __future__ import annotations
"""Page title / description / social tags for vehicle pages.

Values are computed per request and handed to the template; nothing here
touches shared state.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .normalize import derive_title, describe_model, normalize, primary_image, text_field


SITE_NAME = 'TrueVin'
SITE_TITLE = 'TrueVin - Vehicle Marketplace'
SITE_DESCRIPTION = 'Your trusted vehicle marketplace. Browse, buy, and sell vehicles with confidence.'
SITE_URL = 'https://truevin.com'
DEFAULT_IMAGE = '/og-image.html'


@dataclass
class PageMeta:
    title: str
    page_title: str
    description: str
    image: str
    vin: str = ''
    og: Dict[str, str] = field(default_factory=dict)
    twitter: Dict[str, str] = field(default_factory=dict)


DEFAULT_META = PageMeta(
    title=SITE_TITLE,
    page_title=SITE_TITLE,
    description=SITE_DESCRIPTION,
    image=DEFAULT_IMAGE,
    og={
        'og:title': SITE_TITLE,
        'og:description': SITE_DESCRIPTION,
        'og:image': DEFAULT_IMAGE,
        'og:url': SITE_URL,
        'og:type': 'website',
    },
    twitter={
        'twitter:card': 'summary',
        'twitter:title': SITE_TITLE,
        'twitter:description': SITE_DESCRIPTION,
        'twitter:image': DEFAULT_IMAGE,
    },
)


def vehicle_meta(record: Mapping[str, Any], url: str = SITE_URL) -> PageMeta:
    fields = normalize(record)
    title = derive_title(record, fields)
    vin = fields.get('VIN', '').strip() or text_field(record, 'ocr_result').strip()
    description = describe_model(fields)
    if vin:
        description = f"{description} - VIN: {vin}" if description else f"VIN: {vin}"
    image = primary_image(record) or DEFAULT_IMAGE
    return PageMeta(
        title=title,
        page_title=f"{title} | {SITE_NAME}",
        description=description,
        image=image,
        vin=vin,
        og={
            'og:title': title,
            'og:description': description,
            'og:image': image,
            'og:url': url,
            'og:type': 'article',
        },
        twitter={
            'twitter:card': 'summary_large_image',
            'twitter:title': title,
            'twitter:description': description,
            'twitter:image': image,
        },
    )
