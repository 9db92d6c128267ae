from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional

from .normalize import (
    CanonicalFields,
    compose_vin,
    derive_title,
    describe_model,
    field_sections,
    gallery_images,
    normalize,
    primary_image,
    spin_images,
    text_field,
)


class SearchMode(str, Enum):
    STOCK = 'Stock'
    VIN = 'VIN'
    NAME = 'Name'

    @classmethod
    def parse(cls, raw: Optional[str]) -> "SearchMode":
        key = (raw or '').strip().lower()
        for mode in cls:
            if mode.value.lower() == key or mode.name.lower() == key:
                return mode
        return cls.STOCK


class SortOrder(str, Enum):
    NEWEST = 'Newest'
    PRICE_ASC = 'Price: Low to High'
    PRICE_DESC = 'Price: High to Low'

    @classmethod
    def parse(cls, raw: Optional[str]) -> "SortOrder":
        key = (raw or '').strip().lower().replace('-', '_')
        for order in cls:
            if order.value.lower() == key or order.name.lower() == key:
                return order
        return cls.NEWEST


@dataclass
class VehicleCard:
    """One tile on the listing page."""
    stock_number: str
    title: str
    subtitle: str = ''
    image: str = ''
    vin_display: str = ''
    final_bid: str = ''

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "VehicleCard":
        fields = normalize(record)
        return cls(
            stock_number=text_field(record, 'stock_number'),
            title=derive_title(record, fields),
            subtitle=describe_model(fields),
            image=primary_image(record),
            vin_display=text_field(record, 'vin_display'),
            final_bid=text_field(record, 'final_bid'),
        )


@dataclass
class SpinViewer:
    """State of the 360 overlay: which frame of ``images`` is on screen."""
    images: List[str]
    index: int = 0

    @classmethod
    def at(cls, images: List[str], raw_index: Any) -> Optional["SpinViewer"]:
        if not images:
            return None
        try:
            idx = int(raw_index)
        except (TypeError, ValueError):
            idx = 0
        return cls(images=list(images), index=idx % len(images))

    @property
    def current(self) -> str:
        return self.images[self.index] if self.images else ''

    @property
    def prev_index(self) -> int:
        return (self.index - 1 + len(self.images)) % len(self.images)

    @property
    def next_index(self) -> int:
        return (self.index + 1) % len(self.images)


@dataclass
class VehicleDetail:
    stock_number: str
    title: str
    vin: str
    final_bid: str
    vin_display: str
    fields: CanonicalFields
    old_fields: CanonicalFields = field(default_factory=dict)
    new_fields: CanonicalFields = field(default_factory=dict)
    images: List[str] = field(default_factory=list)
    spin_images: List[str] = field(default_factory=list)
    main_image: str = ''

    @classmethod
    def from_record(cls, record: Mapping[str, Any], image_index: Any = None) -> "VehicleDetail":
        fields = normalize(record)
        old_fields, new_fields = field_sections(record)
        images = gallery_images(record)
        main = primary_image(record)
        if images and image_index is not None:
            try:
                main = images[int(image_index) % len(images)]
            except (TypeError, ValueError):
                pass
        return cls(
            stock_number=text_field(record, 'stock_number'),
            title=derive_title(record, fields),
            vin=compose_vin(record, fields),
            final_bid=text_field(record, 'final_bid'),
            vin_display=text_field(record, 'vin_display'),
            fields=fields,
            old_fields=old_fields,
            new_fields=new_fields,
            images=images,
            spin_images=spin_images(record),
            main_image=main,
        )
