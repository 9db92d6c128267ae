from marketplace.models import SearchMode, SortOrder, SpinViewer, VehicleCard, VehicleDetail


RECORD = {
    'stock_number': '4321',
    'final_bid': '$7,250',
    'vin_display': '<b>1HGCM82633A</b>',
    'ocr_result': '..004352',
    'allpagedata_images': ['a.jpg', 'b.jpg', 'c.jpg'],
    'allpagedata_3sixty': ['s0', 's1', 's2', 's3'],
    'allpagedata_fields': {'VIN': '1HGCM82633AXXXXXX', 'Year': '2003'},
    'newdata': [{'Make': 'Honda'}, {'Model': 'Accord'}],
}


def test_search_mode_parse():
    assert SearchMode.parse('vin') is SearchMode.VIN
    assert SearchMode.parse('Name') is SearchMode.NAME
    assert SearchMode.parse(None) is SearchMode.STOCK
    assert SearchMode.parse('bogus') is SearchMode.STOCK


def test_sort_order_parse():
    assert SortOrder.parse('price_asc') is SortOrder.PRICE_ASC
    assert SortOrder.parse('Price: High to Low') is SortOrder.PRICE_DESC
    assert SortOrder.parse('price-desc') is SortOrder.PRICE_DESC
    assert SortOrder.parse('') is SortOrder.NEWEST


def test_vehicle_card_from_record():
    card = VehicleCard.from_record(RECORD)
    assert card.stock_number == '4321'
    assert card.title == '2003 Honda Accord'
    assert card.subtitle == '2003 Honda Accord'
    assert card.image == 'a.jpg'
    assert card.final_bid == '$7,250'
    assert card.vin_display.startswith('<b>')


def test_vehicle_detail_from_record():
    detail = VehicleDetail.from_record(RECORD)
    assert detail.vin == '1HGCM82633A004352'
    assert detail.main_image == 'a.jpg'
    assert detail.old_fields == {'VIN': '1HGCM82633AXXXXXX', 'Year': '2003'}
    assert detail.new_fields == {'Make': 'Honda', 'Model': 'Accord'}
    assert VehicleDetail.from_record(RECORD, '2').main_image == 'c.jpg'
    assert VehicleDetail.from_record(RECORD, '4').main_image == 'b.jpg'
    assert VehicleDetail.from_record(RECORD, 'x').main_image == 'a.jpg'


def test_spin_viewer_wraps():
    spin = SpinViewer.at(RECORD['allpagedata_3sixty'], '0')
    assert spin.current == 's0'
    assert spin.prev_index == 3
    assert spin.next_index == 1
    last = SpinViewer.at(RECORD['allpagedata_3sixty'], 7)
    assert last.index == 3 and last.next_index == 0
    assert SpinViewer.at(RECORD['allpagedata_3sixty'], 'junk').index == 0
    assert SpinViewer.at([], 1) is None
