from datetime import date, datetime, timezone
from math import isfinite

from bson import ObjectId


class InvalidProduct(ValueError):
    """源数据记录无法转换为产品"""


def normalize_sale_date(raw):
    """Reduce a sale timestamp to its UTC calendar day.

    Accepts ISO-8601 strings (with or without offset, ``Z`` included),
    ``datetime`` and ``date`` values. Naive timestamps are treated as UTC.
    Returns a naive ``datetime`` at midnight, which pymongo stores as a UTC
    BSON date.
    """
    if isinstance(raw, datetime):
        moment = raw
    elif isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day)
    elif isinstance(raw, str) and raw.strip():
        text = raw.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            moment = datetime.fromisoformat(text)
        except ValueError as exc:
            raise InvalidProduct(f'invalid dateOfSale: {raw!r}') from exc
    else:
        raise InvalidProduct(f'invalid dateOfSale: {raw!r}')

    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return datetime(moment.year, moment.month, moment.day)


def _parse_price(raw):
    if isinstance(raw, bool):
        raise InvalidProduct(f'invalid price: {raw!r}')
    try:
        price = float(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidProduct(f'invalid price: {raw!r}') from exc
    if not isfinite(price) or price < 0:
        raise InvalidProduct(f'invalid price: {raw!r}')
    return price


def _parse_sold(raw):
    if not isinstance(raw, bool):
        raise InvalidProduct(f'invalid sold flag: {raw!r}')
    return raw


class Product:
    """商品交易记录模型"""

    def __init__(self, id, title, price, description, category, image, sold, date_of_sale):
        self.id = id
        self.title = title
        self.price = price
        self.description = description
        self.category = category
        self.image = image
        self.sold = sold
        self.date_of_sale = date_of_sale

    def to_dict(self):
        """转换为 MongoDB 文档"""
        return {
            'id': self.id,
            'title': self.title,
            'price': self.price,
            'description': self.description,
            'category': self.category,
            'image': self.image,
            'sold': self.sold,
            'dateOfSale': self.date_of_sale,
        }

    @staticmethod
    def from_source(item):
        """从远程数据集的一条记录创建产品，校验价格与日期"""
        if not isinstance(item, dict):
            raise InvalidProduct(f'expected an object, got {type(item).__name__}')
        return Product(
            id=item.get('id'),
            title=item.get('title', ''),
            price=_parse_price(item.get('price')),
            description=item.get('description', ''),
            category=item.get('category', ''),
            image=item.get('image', ''),
            sold=_parse_sold(item.get('sold', False)),
            date_of_sale=normalize_sale_date(item.get('dateOfSale')),
        )

    @staticmethod
    def serialize(document):
        """Make a stored document JSON friendly."""
        data = dict(document)
        if isinstance(data.get('_id'), ObjectId):
            data['_id'] = str(data['_id'])
        sale_date = data.get('dateOfSale')
        if isinstance(sale_date, (datetime, date)):
            data['dateOfSale'] = sale_date.strftime('%Y-%m-%d')
        return data
