from __future__ import annotations
from flask import current_app, redirect, url_for, flash

from marketplace.feed import start_refresh_async


def register(bp):

    @bp.route('/refresh', methods=['POST'])
    def refresh():
        client = current_app.extensions['api_client']
        state = current_app.extensions['feed_state']
        started = start_refresh_async(client, state)
        if started:
            flash('Vehicle feed refresh started', 'info')
        else:
            flash('A refresh is already running', 'error')
        return redirect(url_for('main.index'))
