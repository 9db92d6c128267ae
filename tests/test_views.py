import time

import pytest

from app import create_app
from marketplace.feed import new_feed_state


def _vehicle(stock, bid, **extra):
    rec = {'stock_number': stock, 'final_bid': bid, 'allpagedata_passed': True, 'vin_display': f'<span class="vin">{stock}</span>'}
    rec.update(extra)
    return rec


RECORDS = [
    _vehicle('1001', '$5,000', timestamp='2024-01-02', allpagedata_fields={'Year': '2018', 'Make': 'Ford', 'Model': 'Focus', 'VIN': '1FADP3F20JL000001'}, ocr_result='JL123456'),
    _vehicle('1002', '$9,000', timestamp='2024-01-03', newdata='{"VehicleTitle": "2021 Tesla Model 3"}', allpagedata_3sixty=['s0.jpg', 's1.jpg'], allpagedata_images=['a.jpg', 'b.jpg']),
    _vehicle('1003', 'N/A', timestamp='2024-01-04'),
] + [_vehicle(f'2{i:03d}', f'${i}', timestamp=f'2023-{i:03d}') for i in range(20)]


class FakeClient:

    def __init__(self, records, stock=None, error=None):
        self.records = records
        self.stock = stock
        self.error = error

    def list_vehicles(self):
        if self.error:
            raise self.error
        return list(self.records)

    def get_stock(self, stock_number):
        if self.error:
            raise self.error
        return self.stock


def _app(client):
    app = create_app({'TESTING': True, 'FEED_AUTOLOAD': False, 'SECRET_KEY': 'test'})
    app.extensions['api_client'] = client
    app.extensions['feed_state'] = new_feed_state()
    return app


@pytest.fixture()
def client():
    app = _app(FakeClient(RECORDS))
    with app.test_client() as c:
        yield c


def test_index_loads_feed_and_paginates(client):
    resp = client.get('/')
    body = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert '22 vehicles' in body
    assert body.count('class="card"') == 15
    assert 'Load more' in body
    # newest first
    assert body.index('2021 Tesla Model 3') < body.index('2018 Ford Focus')
    assert '<span class="vin">1001</span>' in body


def test_index_load_more_reveals_all(client):
    body = client.get('/?pages=2').get_data(as_text=True)
    assert body.count('class="card"') == 22
    assert 'All vehicles loaded' in body


def test_index_vin_search(client):
    body = client.get('/?mode=VIN&q=1fadp3f20jl999456').get_data(as_text=True)
    assert '1 vehicles' in body
    assert '2018 Ford Focus' in body


def test_index_name_search_and_price_sort(client):
    body = client.get('/?mode=Name&q=tesla&sort=price_desc').get_data(as_text=True)
    assert '1 vehicles' in body
    assert '2021 Tesla Model 3' in body


def test_index_shows_load_failure():
    app = _app(FakeClient([], error=RuntimeError('down')))
    with app.test_client() as c:
        body = c.get('/').get_data(as_text=True)
    assert 'could not be loaded' in body


def test_detail_page_from_remote_lookup():
    app = _app(FakeClient([], stock=RECORDS[1]))
    with app.test_client() as c:
        resp = c.get('/vehicle/1002?spin=3&img=1')
        body = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert '<title>2021 Tesla Model 3 | TrueVin</title>' in body
    assert 'New Details' in body
    assert 'alt="360 view 1"' in body
    assert 'src="b.jpg" alt="Vehicle"' in body


def test_detail_falls_back_to_loaded_feed():
    app = _app(FakeClient(RECORDS, stock=None))
    app.extensions['feed_state']['records'] = list(RECORDS)
    with app.test_client() as c:
        body = c.get('/vehicle/1001').get_data(as_text=True)
    assert 'VIN: 1FADP3F20JL123456' in body
    assert 'Vehicle Details' in body


def test_detail_not_found():
    app = _app(FakeClient([], error=RuntimeError('down')))
    with app.test_client() as c:
        resp = c.get('/vehicle/nope')
    assert resp.status_code == 404
    assert 'Vehicle not found' in resp.get_data(as_text=True)


def test_refresh_redirects(monkeypatch):
    started = {}

    def fake_start(client, state):
        started['yes'] = True
        return True

    monkeypatch.setattr('app.views.admin.start_refresh_async', fake_start)
    app = _app(FakeClient(RECORDS))
    with app.test_client() as c:
        resp = c.post('/refresh')
    assert resp.status_code == 302
    assert started == {'yes': True}


def test_first_request_waits_for_background_load():
    class SlowClient(FakeClient):
        def list_vehicles(self):
            time.sleep(0.2)
            return super().list_vehicles()

    app = create_app({'TESTING': True, 'SECRET_KEY': 'test', 'API_CLIENT': SlowClient([_vehicle('S1', '$1')])})
    with app.test_client() as c:
        body = c.get('/').get_data(as_text=True)
    assert 'S1' in body
    assert 'Loading vehicles' not in body
