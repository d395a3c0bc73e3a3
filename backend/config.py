import os
from dotenv import load_dotenv

from app.services.env_utils import sanitize_env_value

load_dotenv()

DEFAULT_SEED_DATA_URL = 'https://s3.amazonaws.com/roxiler.com/product_transaction.json'


def _env(name: str, fallback: str = '') -> str:
    return sanitize_env_value(os.getenv(name), fallback)


class Config:
    """应用配置"""

    # MongoDB 配置
    MONGO_URI = _env('MONGO_URI', 'mongodb://localhost:27017/transactions')
    # Used when MONGO_URI does not name a database (e.g. Atlas SRV strings)
    MONGO_DBNAME = _env('MONGO_DBNAME', 'transactions')
    PRODUCTS_COLLECTION = _env('PRODUCTS_COLLECTION', 'products')

    # 种子数据源
    SEED_DATA_URL = _env('SEED_DATA_URL', DEFAULT_SEED_DATA_URL)
    SEED_TIMEOUT = float(_env('SEED_TIMEOUT', '15'))

    # API 配置
    API_PREFIX = '/api/products'

    # CORS allowlist (comma-separated origins)
    # Example:
    # CORS_ALLOWED_ORIGINS=https://dashboard.example.com,https://www.example.com
    CORS_ALLOWED_ORIGINS = [
        origin.strip()
        for origin in _env('CORS_ALLOWED_ORIGINS').split(',')
        if origin.strip()
    ]

    LOG_LEVEL = _env('LOG_LEVEL', 'INFO').upper()


class TestingConfig(Config):
    TESTING = True
    SEED_DATA_URL = 'https://seed.example.test/products.json'
    CORS_ALLOWED_ORIGINS = []
