"""Entry point (no CLI args): interactive vehicle search in the terminal.

Behavior:
    1. Initialize logging (INFO level)
    2. Fetch the vehicle feed once
    3. Prompt for search mode, query and sort order (q to quit)
    4. Print the first page of matches, offer the next page
"""

from __future__ import annotations

from typing import Any, Dict, List

from marketplace.client import VehicleApiClient
from marketplace.console import Console
from marketplace.logger import Logger, setup_logging
from marketplace.models import SearchMode, SortOrder, VehicleCard
from marketplace.normalize import compose_vin, safe_display
from marketplace.search import PAGE_SIZE, build_view, normalize_query, paginate


log = Logger.bind(__name__)

SORT_KEYS = {
    'newest': SortOrder.NEWEST,
    'low': SortOrder.PRICE_ASC,
    'high': SortOrder.PRICE_DESC,
}


class App:

    def __init__(self, client: VehicleApiClient | None = None):
        self.client = client or VehicleApiClient()

    # --- interactive helpers ---
    def printPage(self, visible: List[Dict[str, Any]], offset: int) -> None:
        for i, record in enumerate(visible[offset:], start=offset + 1):
            card = VehicleCard.from_record(record)
            print(f"{i:3d}. {card.title}  #{card.stock_number}  ${safe_display(card.final_bid)}  VIN {compose_vin(record) or '-'}")

    def searchLoop(self, records: List[Dict[str, Any]]) -> None:
        while True:
            mode_key = Console.select('mode', [m.value.lower() for m in SearchMode])
            if mode_key == 'quit': return
            mode = SearchMode.parse(mode_key)
            query = normalize_query(mode, Console.input_str('query (empty = all)', allow_empty=True))
            sort_key = Console.select('sort', list(SORT_KEYS))
            if sort_key == 'quit': return
            result = build_view(records, mode, query, SORT_KEYS[sort_key])
            print(f"{len(result)} vehicles")
            pages, shown = 1, 0
            while True:
                visible, pages, has_more = paginate(result, pages, PAGE_SIZE)
                self.printPage(visible, shown)
                shown = len(visible)
                if not has_more or not Console.confirm('load more?'): break
                pages += 1

    def run(self) -> int:
        setup_logging()  # default INFO
        try:
            with self.client as client:
                records = log.measure('feed fetch', client.list_vehicles)
        except Exception as e:  # noqa: BLE001
            log.exception(e)
            return 1
        self.searchLoop(records)
        return 0


def main() -> int:
    return App().run()


if __name__ == "__main__":
    raise SystemExit(main())
