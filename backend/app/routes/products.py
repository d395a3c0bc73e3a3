import logging

from flask import Blueprint, jsonify, request
from pymongo.errors import ConnectionFailure

from app import get_repository
from app.routes.params import (
    MAX_PAGE,
    MAX_PER_PAGE,
    InvalidParameter,
    parse_month,
    parse_positive_int,
)
from app.services.product_service import ProductService

logger = logging.getLogger(__name__)

products_bp = Blueprint('products', __name__)


def _service() -> ProductService:
    return ProductService(get_repository())


def _bad_request(error: InvalidParameter):
    return jsonify({'error': str(error)}), 400


def _server_error(message: str, error: Exception):
    """Log the cause; clients only see a generic message."""
    if isinstance(error, ConnectionFailure):
        logger.error("%s: database unavailable: %s", message, error)
        return jsonify({'error': 'Database unavailable'}), 503
    logger.exception(message)
    return jsonify({'error': message}), 500


@products_bp.route('/transactions', methods=['GET'])
def get_transactions():
    """
    分页列出交易

    Query Parameters:
    - page: 页码，默认 1
    - perPage: 每页数量，默认 10
    - search: 标题/描述子串，或价格（匹配 [n, n+1)）
    - month: 月份 1-12，可选
    """
    try:
        page = parse_positive_int(request.args.get('page'), 'page', default=1, maximum=MAX_PAGE)
        per_page = parse_positive_int(request.args.get('perPage'), 'perPage', default=10, maximum=MAX_PER_PAGE)
        month = parse_month(request.args.get('month'))
    except InvalidParameter as e:
        return _bad_request(e)

    search = request.args.get('search', '')
    try:
        result = _service().list_transactions(page=page, per_page=per_page, search=search, month=month)
        return jsonify(result)
    except Exception as e:
        return _server_error('Server error while fetching transactions', e)


@products_bp.route('/sales', methods=['GET'])
def get_sales():
    """月度销售统计"""
    try:
        month = parse_month(request.args.get('month'), required=True)
    except InvalidParameter as e:
        return _bad_request(e)

    try:
        return jsonify(_service().get_sales_summary(month))
    except Exception as e:
        return _server_error('Server error while fetching sales statistics', e)


@products_bp.route('/bar-chart', methods=['GET'])
def get_price_ranges():
    """月度价格区间分布"""
    try:
        month = parse_month(request.args.get('month'), required=True)
    except InvalidParameter as e:
        return _bad_request(e)

    try:
        return jsonify(_service().get_price_ranges(month))
    except Exception as e:
        return _server_error('Server error while fetching price range data', e)


@products_bp.route('/category', methods=['GET'])
def get_categories():
    """月度分类统计"""
    try:
        month = parse_month(request.args.get('month'), required=True)
    except InvalidParameter as e:
        return _bad_request(e)

    try:
        return jsonify(_service().get_category_breakdown(month))
    except Exception as e:
        return _server_error('Server error while fetching category data', e)
