from __future__ import annotations
from flask import current_app, render_template, request

from marketplace.feed import feed_loaded, refresh_feed, wait_for_feed
from marketplace.logger import Logger
from marketplace.meta import DEFAULT_META
from marketplace.models import SearchMode, SortOrder, VehicleCard
from marketplace.search import build_view, normalize_query, paginate


log = Logger.bind(__name__)

SEARCH_PLACEHOLDERS = {
    SearchMode.STOCK: 'Enter Stock Number...',
    SearchMode.VIN: 'Enter VIN',
    SearchMode.NAME: 'Make Model Year...',
}


def register(bp):

    @bp.route('/')
    def index():
        mode = SearchMode.parse(request.args.get('mode'))
        sort = SortOrder.parse(request.args.get('sort'))
        query = normalize_query(mode, request.args.get('q'))

        state = current_app.extensions['feed_state']
        # first request after startup waits for the feed instead of rendering empty
        if not feed_loaded(state):
            if state.get('running'):
                if not wait_for_feed(state, current_app.config.get('FEED_WAIT_TIMEOUT', 15.0)):
                    log.warn('feed still loading after wait')
            else:
                refresh_feed(current_app.extensions['api_client'], state)
        records = list(state.get('records') or [])

        result = build_view(records, mode, query, sort)
        visible, pages, has_more = paginate(result, request.args.get('pages', 1), current_app.config.get('PAGE_SIZE', 15))
        log.debug(f"listing mode={mode.name} q={query!r} sort={sort.name} matched={len(result)} shown={len(visible)}")
        cards = [VehicleCard.from_record(r) for r in visible]
        return render_template(
            'listing.html',
            cards=cards,
            total=len(result),
            mode=mode,
            modes=list(SearchMode),
            sort=sort,
            sort_orders=list(SortOrder),
            query=query,
            pages=pages,
            has_more=has_more,
            placeholder=SEARCH_PLACEHOLDERS[mode],
            loading=bool(state.get('running')) and not records,
            load_failed=bool(state.get('last_error')) and not records,
            meta=DEFAULT_META,
        )
