from __future__ import annotations
"""Vehicle feed state and refresh helpers.

Provides a simple thread-based asynchronous runner so the Flask web app can
refresh the vehicle feed without blocking the request thread.

State dict (shared via app.extensions['feed_state']):
    records: list[dict]          # last successfully fetched feed
    running: bool
    generation: int              # bumped per refresh; latest one wins
    last_started: datetime | None
    last_finished: datetime | None
    last_error: str | None
    last_count: int | None
    loaded: threading.Event      # set once the latest refresh has finished
"""
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .client import VehicleApiClient
from .logger import Logger


log = Logger.bind(__name__)

_lock = threading.Lock()


def _utc_now():
    return datetime.now(timezone.utc)


def new_feed_state() -> Dict[str, Any]:
    return {
        'records': [],
        'running': False,
        'generation': 0,
        'last_started': None,
        'last_finished': None,
        'last_error': None,
        'last_count': None,
        'loaded': threading.Event(),
    }


def refresh_feed(client: VehicleApiClient, state: Dict[str, Any]) -> bool:
    """Fetch the feed now. Returns True if this call's result was applied.

    A result whose generation was overtaken by a newer refresh is discarded.
    """
    with _lock:
        state['generation'] = state.get('generation', 0) + 1
        generation = state['generation']
        state['running'] = True
        state['last_started'] = _utc_now()
    log.info(f"feed refresh start generation={generation}")
    try:
        records = client.list_vehicles()
    except Exception as e:  # noqa: BLE001
        log.exception(e)
        with _lock:
            if state['generation'] == generation:
                state['last_error'] = str(e)
                state['last_finished'] = _utc_now()
                state['running'] = False
                state['loaded'].set()
        return False
    with _lock:
        if state['generation'] != generation:
            log.debug(f"feed refresh stale generation={generation} latest={state['generation']}")
            return False
        state['records'] = records
        state['last_count'] = len(records)
        state['last_error'] = None
        state['last_finished'] = _utc_now()
        state['running'] = False
        state['loaded'].set()
    log.info(f"feed refresh done generation={generation} records={len(records)}")
    return True


def start_refresh_async(client: VehicleApiClient, state: Dict[str, Any]) -> bool:
    """Start a background refresh if not already running.

    Returns True if a new job was started, False if a job is already running.
    """
    with _lock:
        if state.get('running'):
            return False
        state['running'] = True
    t = threading.Thread(target=refresh_feed, args=(client, state), name='feed-refresh', daemon=True)
    t.start()
    return True


def feed_loaded(state: Dict[str, Any]) -> bool:
    return state.get('last_finished') is not None


def wait_for_feed(state: Dict[str, Any], timeout: float) -> bool:
    """Block until the in-flight refresh finishes. Returns False on timeout."""
    return state['loaded'].wait(timeout)


def find_record(state: Dict[str, Any], stock_number: str) -> Optional[Dict[str, Any]]:
    for record in state.get('records') or []:
        if str(record.get('stock_number', '')) == stock_number:
            return record
    return None
