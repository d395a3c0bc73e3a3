"""
Tests for product normalization, validation and serialization.
"""

from datetime import date, datetime

import pytest
from bson import ObjectId

from app.models.product import InvalidProduct, Product, normalize_sale_date


def _item(**overrides):
    item = {
        'id': 1,
        'title': 'Fjallraven Backpack',
        'price': 329.85,
        'description': 'Your perfect pack for everyday use',
        'category': "men's clothing",
        'image': 'https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg',
        'sold': False,
        'dateOfSale': '2021-11-27T20:29:54+05:30',
    }
    item.update(overrides)
    return item


class TestNormalizeSaleDate:

    def test_offset_is_converted_to_utc_day(self):
        # 01:00 at +05:30 is still the previous day in UTC
        assert normalize_sale_date('2022-03-01T01:00:00+05:30') == datetime(2022, 2, 28)

    def test_time_component_is_dropped(self):
        assert normalize_sale_date('2021-11-27T20:29:54+05:30') == datetime(2021, 11, 27)

    def test_zulu_suffix(self):
        assert normalize_sale_date('2022-07-04T23:59:59Z') == datetime(2022, 7, 4)

    def test_naive_timestamp_treated_as_utc(self):
        assert normalize_sale_date('2022-07-04T10:00:00') == datetime(2022, 7, 4)

    def test_date_only_string(self):
        assert normalize_sale_date('2022-01-15') == datetime(2022, 1, 15)

    def test_date_and_datetime_values(self):
        assert normalize_sale_date(date(2022, 5, 6)) == datetime(2022, 5, 6)
        assert normalize_sale_date(datetime(2022, 5, 6, 18, 30)) == datetime(2022, 5, 6)

    @pytest.mark.parametrize('raw', ['', 'not a date', None, 12345])
    def test_invalid_values_rejected(self, raw):
        with pytest.raises(InvalidProduct):
            normalize_sale_date(raw)


class TestFromSource:

    def test_maps_all_fields(self):
        doc = Product.from_source(_item()).to_dict()
        assert doc == {
            'id': 1,
            'title': 'Fjallraven Backpack',
            'price': 329.85,
            'description': 'Your perfect pack for everyday use',
            'category': "men's clothing",
            'image': 'https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg',
            'sold': False,
            'dateOfSale': datetime(2021, 11, 27),
        }

    def test_numeric_string_price_is_accepted(self):
        assert Product.from_source(_item(price='12.5')).price == 12.5

    def test_zero_price_is_valid(self):
        assert Product.from_source(_item(price=0)).price == 0.0

    @pytest.mark.parametrize('price', [-0.01, 'abc', None, float('nan'), True])
    def test_invalid_price_rejected(self, price):
        with pytest.raises(InvalidProduct):
            Product.from_source(_item(price=price))

    @pytest.mark.parametrize('sold', ['false', 'true', 0, 1, None])
    def test_non_boolean_sold_rejected(self, sold):
        with pytest.raises(InvalidProduct):
            Product.from_source(_item(sold=sold))

    def test_missing_sold_defaults_to_false(self):
        item = _item()
        del item['sold']
        assert Product.from_source(item).sold is False

    def test_non_object_rejected(self):
        with pytest.raises(InvalidProduct):
            Product.from_source(['not', 'a', 'dict'])


class TestSerialize:

    def test_object_id_and_date_become_strings(self):
        oid = ObjectId()
        data = Product.serialize({'_id': oid, 'title': 'x', 'dateOfSale': datetime(2022, 3, 9)})
        assert data == {'_id': str(oid), 'title': 'x', 'dateOfSale': '2022-03-09'}

    def test_does_not_mutate_input(self):
        doc = {'dateOfSale': datetime(2022, 3, 9)}
        Product.serialize(doc)
        assert doc['dateOfSale'] == datetime(2022, 3, 9)
