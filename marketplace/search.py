from __future__ import annotations
"""Client-side search over the fetched vehicle feed.

Pipeline (``build_view``), strictly in order:
  1. drop records that are not eligible for listing
  2. apply the query for the selected mode (Stock / VIN / Name)
  3. sort by Newest / Price ascending / Price descending

VIN queries of 11 characters or more compare the structural prefix exactly and
the OCR-captured tail fuzzily; shorter queries fall back to a substring match.
"""
import re
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from .logger import Logger
from .models import SearchMode, SortOrder
from .normalize import VIN_PREFIX_LEN, VIN_SUFFIX_LEN, derive_title, normalize, text_field


log = Logger.bind(__name__)

PAGE_SIZE = 15
VIN_MIN_SUFFIX_AGREEMENT = 2
BID_SENTINEL = 'N/A'

_RE_NON_NUMERIC = re.compile(r'[^0-9.]')
_RE_LEADING_NUMBER = re.compile(r'\d+(?:\.\d*)?|\.\d+')


def _flag_set(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == 'true'
    return value is True


def is_eligible(record: Mapping[str, Any]) -> bool:
    """Passed at least one ingestion pipeline and carries a real final bid."""
    if not (_flag_set(record.get('allpagedata_passed')) or _flag_set(record.get('newdata_passed'))):
        return False
    bid = record.get('final_bid')
    return isinstance(bid, str) and bid != '' and BID_SENTINEL not in bid


def normalize_query(mode: SearchMode, raw: Optional[str]) -> str:
    q = (raw or '').strip()
    return q.upper() if mode is SearchMode.VIN else q


def matches_vin(record: Mapping[str, Any], query: str) -> bool:
    fields = normalize(record)
    vin = fields.get('VIN', '')
    ocr = text_field(record, 'ocr_result')
    if len(query) < VIN_PREFIX_LEN:
        return query in (vin + ocr).upper()
    if vin[:VIN_PREFIX_LEN].upper() != query[:VIN_PREFIX_LEN]:
        return False
    q_suffix = query[-VIN_SUFFIX_LEN:]
    c_suffix = ocr[-VIN_SUFFIX_LEN:].upper()
    agree = sum(1 for a, b in zip(q_suffix, c_suffix) if a == b)
    return agree >= VIN_MIN_SUFFIX_AGREEMENT


def matches_name(record: Mapping[str, Any], query: str) -> bool:
    return query.lower() in derive_title(record).lower()


def matches_stock(record: Mapping[str, Any], query: str) -> bool:
    return query.lower() in text_field(record, 'stock_number').lower()


def parse_bid(final_bid: Any) -> float:
    """Numeric value of a currency-like bid; unparsable values count as 0."""
    digits = _RE_NON_NUMERIC.sub('', '' if final_bid is None else str(final_bid))
    m = _RE_LEADING_NUMBER.match(digits)
    if not m:
        return 0.0
    return float(m.group(0))


def _timestamp_key(record: Mapping[str, Any]) -> str:
    return text_field(record, 'timestamp')


def sort_records(records: Iterable[Mapping[str, Any]], order: SortOrder) -> List[Mapping[str, Any]]:
    # sorted() is stable for reverse=True as well, so ties keep input order
    if order is SortOrder.PRICE_ASC:
        return sorted(records, key=lambda r: parse_bid(r.get('final_bid')))
    if order is SortOrder.PRICE_DESC:
        return sorted(records, key=lambda r: parse_bid(r.get('final_bid')), reverse=True)
    return sorted(records, key=_timestamp_key, reverse=True)


def build_view(records: Sequence[Mapping[str, Any]], mode: SearchMode, query: str, sort_order: SortOrder) -> List[Mapping[str, Any]]:
    """Filter and order ``records`` for display. Inputs are never mutated."""
    out = [r for r in records if is_eligible(r)]
    eligible = len(out)
    if query:
        if mode is SearchMode.VIN:
            out = [r for r in out if matches_vin(r, query)]
        elif mode is SearchMode.NAME:
            out = [r for r in out if matches_name(r, query)]
        else:
            out = [r for r in out if matches_stock(r, query)]
    log.debug(f"build_view total={len(records)} eligible={eligible} matched={len(out)} mode={mode.name} sort={sort_order.name}")
    return sort_records(out, sort_order)


def paginate(result: Sequence[Any], pages_revealed: Any, page_size: int = PAGE_SIZE) -> Tuple[List[Any], int, bool]:
    """Return (visible, pages_revealed, has_more) for incremental reveal."""
    try:
        pages = int(pages_revealed)
    except (TypeError, ValueError):
        pages = 1
    needed = max(1, -(-len(result) // page_size))
    pages = min(max(1, pages), needed)
    visible = list(result[:page_size * pages])
    return visible, pages, len(visible) < len(result)
