from __future__ import annotations
from flask import Flask
from pathlib import Path
from typing import Any, Dict

from marketplace.client import VehicleApiClient
from marketplace.feed import new_feed_state, refresh_feed, start_refresh_async
from marketplace.logger import Logger
from marketplace.normalize import safe_display


log = Logger.bind(__name__)


def create_app(config: Dict[str, Any] | None = None) -> Flask:
    # Explicit template folder path (project root/templates)
    base_dir = Path(__file__).resolve().parent.parent
    template_dir = base_dir / 'templates'
    app = Flask(__name__, template_folder=str(template_dir))
    if not template_dir.exists():
        log.warn(f"template dir not found: {template_dir}")
    else:
        log.debug(f"template dir: {template_dir}")
    app.config.update({
        'SECRET_KEY': 'dev-key',
        'FEED_AUTOLOAD': True,
        'PAGE_SIZE': 15,
        'FEED_WAIT_TIMEOUT': 15.0,
    })
    if config:
        app.config.update(config)

    client = app.config.get('API_CLIENT') or VehicleApiClient()

    from .views import bp  # noqa: WPS433 (late import to avoid circular)
    app.register_blueprint(bp)
    app.add_template_filter(safe_display, 'display')

    # Expose API client + shared feed state via app extensions for access in views
    app.extensions['api_client'] = client
    app.extensions['feed_state'] = new_feed_state()

    if app.config.get('FEED_AUTOLOAD'):
        start_refresh_async(client, app.extensions['feed_state'])

    @app.cli.command('refresh')
    def refresh_command():  # pragma: no cover - CLI helper
        ok = refresh_feed(app.extensions['api_client'], app.extensions['feed_state'])
        state = app.extensions['feed_state']
        print(f"Refreshed: ok={ok} records={state.get('last_count')} error={state.get('last_error')}")

    return app
