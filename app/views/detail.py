from __future__ import annotations
from flask import current_app, render_template, request

from marketplace.feed import find_record
from marketplace.logger import Logger
from marketplace.meta import DEFAULT_META, vehicle_meta
from marketplace.models import SpinViewer, VehicleDetail


log = Logger.bind(__name__)


def _lookup(stock_number: str):
    client = current_app.extensions['api_client']
    try:
        record = client.get_stock(stock_number)
    except Exception as e:  # noqa: BLE001
        log.warn(f"stock lookup fail stock={stock_number} error={e}")
        record = None
    if record is None:
        record = find_record(current_app.extensions['feed_state'], stock_number)
    return record


def register(bp):

    @bp.route('/vehicle/<stock_number>')
    def vehicle_detail(stock_number: str):
        record = _lookup(stock_number)
        if record is None:
            return render_template('not_found.html', stock_number=stock_number, meta=DEFAULT_META), 404
        vehicle = VehicleDetail.from_record(record, request.args.get('img'))
        spin = None
        if 'spin' in request.args:
            spin = SpinViewer.at(vehicle.spin_images, request.args.get('spin'))
        return render_template(
            'detail.html',
            vehicle=vehicle,
            spin=spin,
            meta=vehicle_meta(record, request.url),
        )
