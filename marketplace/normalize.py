from __future__ import annotations
"""Normalization helpers for vehicle records returned by the vehicles API.

Responsibilities:
 - Merge the older flat schema (``allpagedata_fields``) with ``details`` and
   ``newdata`` into one canonical field mapping (first writer wins).
 - Decode the loose field shapes: plain mapping, list of one-key mappings,
   or either of those JSON-encoded as a string.
 - Derive display values (title, composed VIN, model line, images).

Every function here is pure and never raises for malformed payloads.
"""
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .logger import Logger


log = Logger.bind(__name__)

CanonicalFields = Dict[str, str]

VIN_PREFIX_LEN = 11
VIN_SUFFIX_LEN = 6
NOT_AVAILABLE = 'Not available'


@dataclass(frozen=True)
class FieldsMapping:
    items: Mapping[str, Any]


@dataclass(frozen=True)
class FieldsPairs:
    """Legacy encoding: ``[{"VIN": "..."}, {"Year": "..."}]``."""
    items: Sequence[Mapping[str, Any]]


@dataclass(frozen=True)
class EncodedFields:
    text: str


Fields = Union[FieldsMapping, FieldsPairs, EncodedFields]


def classify_fields(value: Any) -> Optional[Fields]:
    """Tag a raw ``details`` / ``newdata`` value with its shape, or None."""
    if isinstance(value, str):
        return EncodedFields(value) if value.strip() else None
    if isinstance(value, Mapping):
        return FieldsMapping(value)
    if isinstance(value, (list, tuple)):
        return FieldsPairs(value)
    return None


def _as_text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return str(value)
    try:
        return json.dumps(value, ensure_ascii=False, separators=(',', ':'))
    except RecursionError:
        return ''
    except (TypeError, ValueError):
        return str(value)


def _decode_mapping(fields: FieldsMapping) -> List[Tuple[str, Any]]:
    return [(str(k), v) for k, v in fields.items.items()]


def _decode_pairs(fields: FieldsPairs) -> List[Tuple[str, Any]]:
    out: List[Tuple[str, Any]] = []
    for item in fields.items:
        if not isinstance(item, Mapping):
            continue
        out.extend((str(k), v) for k, v in item.items())
    return out


def _decode_encoded(fields: EncodedFields) -> List[Tuple[str, Any]]:
    try:
        parsed = json.loads(fields.text)
    except (ValueError, RecursionError) as e:
        log.debug(f"fields json parse fail error={e}")
        return []
    inner = classify_fields(parsed)
    # a string nested inside the JSON is not decoded a second time
    if inner is None or isinstance(inner, EncodedFields):
        return []
    return decode_fields(inner)


def decode_fields(fields: Optional[Fields]) -> List[Tuple[str, Any]]:
    """Return the (key, value) pairs carried by a tagged fields value."""
    if fields is None:
        return []
    if isinstance(fields, FieldsMapping):
        return _decode_mapping(fields)
    if isinstance(fields, FieldsPairs):
        return _decode_pairs(fields)
    if isinstance(fields, EncodedFields):
        return _decode_encoded(fields)
    return []


def _fill_missing(acc: CanonicalFields, pairs: List[Tuple[str, Any]]) -> None:
    for key, value in pairs:
        if acc.get(key, '') == '':
            acc[key] = _as_text(value)


def decoded_fields(value: Any) -> CanonicalFields:
    """Decode one raw fields value on its own (no merging with other sources)."""
    acc: CanonicalFields = {}
    _fill_missing(acc, decode_fields(classify_fields(value)))
    return acc


def normalize(record: Mapping[str, Any]) -> CanonicalFields:
    """Merge every schema variant of ``record`` into one canonical mapping.

    Priority order: ``allpagedata_fields``, then ``details``, then ``newdata``.
    A later source only fills keys that are absent or empty.
    """
    acc: CanonicalFields = {}
    old = record.get('allpagedata_fields')
    if isinstance(old, Mapping) and old:
        for key, value in old.items():
            acc[str(key)] = _as_text(value)
    _fill_missing(acc, decode_fields(classify_fields(record.get('details'))))
    _fill_missing(acc, decode_fields(classify_fields(record.get('newdata'))))
    return acc


def text_field(record: Mapping[str, Any], key: str) -> str:
    return _as_text(record.get(key))


def derive_title(record: Mapping[str, Any], fields: Optional[CanonicalFields] = None) -> str:
    f = normalize(record) if fields is None else fields
    title = f.get('VehicleTitle', '')
    if title:
        return title
    year, make, model = f.get('Year', ''), f.get('Make', ''), f.get('Model', '')
    if year and make and model:
        return f"{year} {make} {model}"
    return text_field(record, 'stock_number')


def describe_model(fields: CanonicalFields) -> str:
    return f"{fields.get('Year', '')} {fields.get('Make', '')} {fields.get('Model', '')}".strip()


def compose_vin(record: Mapping[str, Any], fields: Optional[CanonicalFields] = None) -> str:
    """Display VIN: 11 leading chars of the canonical VIN + 6 trailing OCR chars."""
    f = normalize(record) if fields is None else fields
    ocr = text_field(record, 'ocr_result')
    return f.get('VIN', '')[:VIN_PREFIX_LEN] + ocr[-VIN_SUFFIX_LEN:]


def _image_list(record: Mapping[str, Any], key: str) -> List[str]:
    value = record.get(key)
    if not isinstance(value, (list, tuple)):
        return []
    return [v for v in value if isinstance(v, str) and v]


def primary_image(record: Mapping[str, Any]) -> str:
    images = _image_list(record, 'allpagedata_images')
    if images:
        return images[0]
    return text_field(record, 'one_image') or text_field(record, 'html_s3_url')


def gallery_images(record: Mapping[str, Any]) -> List[str]:
    images = _image_list(record, 'allpagedata_images')
    if images:
        return images
    for key in ('one_image', 'html_s3_url'):
        single = text_field(record, key)
        if single:
            return [single]
    return []


def spin_images(record: Mapping[str, Any]) -> List[str]:
    return _image_list(record, 'allpagedata_3sixty')


def field_sections(record: Mapping[str, Any]) -> Tuple[CanonicalFields, CanonicalFields]:
    """Return (old_fields, new_fields) for the two detail-page blocks."""
    old = record.get('allpagedata_fields')
    if isinstance(old, Mapping) and old:
        old_fields = {str(k): _as_text(v) for k, v in old.items()}
    else:
        old_fields = decoded_fields(record.get('details'))
    return old_fields, decoded_fields(record.get('newdata'))


def safe_display(value: Any) -> Any:
    if value is None or value == '':
        return NOT_AVAILABLE
    return value
