from marketplace.meta import DEFAULT_IMAGE, DEFAULT_META, SITE_TITLE, vehicle_meta


def test_vehicle_meta_full():
    rec = {
        'stock_number': 'S1',
        'allpagedata_fields': {'Year': '2020', 'Make': 'Honda', 'Model': 'Civic', 'VIN': ' 2HGFC2F59LH000001 '},
        'one_image': 'one.jpg',
    }
    meta = vehicle_meta(rec, 'https://truevin.com/vehicle/S1')
    assert meta.title == '2020 Honda Civic'
    assert meta.page_title == '2020 Honda Civic | TrueVin'
    assert meta.vin == '2HGFC2F59LH000001'
    assert meta.description == '2020 Honda Civic - VIN: 2HGFC2F59LH000001'
    assert meta.image == 'one.jpg'
    assert meta.og['og:url'] == 'https://truevin.com/vehicle/S1'
    assert meta.og['og:type'] == 'article'
    assert meta.twitter['twitter:card'] == 'summary_large_image'


def test_vehicle_meta_falls_back_to_ocr_and_default_image():
    meta = vehicle_meta({'stock_number': 'S2', 'ocr_result': 'ABC123'})
    assert meta.title == 'S2'
    assert meta.vin == 'ABC123'
    assert meta.description == 'VIN: ABC123'
    assert meta.image == DEFAULT_IMAGE


def test_default_meta():
    assert DEFAULT_META.page_title == SITE_TITLE
    assert DEFAULT_META.og['og:type'] == 'website'
