from flask import Blueprint, current_app

from app import SEED_SESSION_EXTENSION, get_repository
from app.services.product_seeder import ProductSeeder

main_bp = Blueprint('main', __name__)

TEXT_PLAIN = {'Content-Type': 'text/plain; charset=utf-8'}


@main_bp.route('/', methods=['GET'])
def index():
    return 'Hello, this is the product transactions REST API', 200, TEXT_PLAIN


@main_bp.route('/initialize', methods=['GET'])
def initialize():
    """导入种子数据（已有数据时不做任何事）"""
    seeder = ProductSeeder(
        get_repository(),
        source_url=current_app.config['SEED_DATA_URL'],
        timeout=current_app.config.get('SEED_TIMEOUT', 15),
        session=current_app.extensions.get(SEED_SESSION_EXTENSION),
    )
    result = seeder.seed()
    if not result.ok:
        return 'Database initialization failed.', 500, TEXT_PLAIN
    return result.message, 200, TEXT_PLAIN
