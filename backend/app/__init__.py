import atexit
import logging

from flask import Flask, current_app
from flask_cors import CORS
from flask_pymongo import PyMongo

from app.services.product_repository import ProductRepository

REPOSITORY_EXTENSION = 'product_repository'
SEED_SESSION_EXTENSION = 'seed_session'


def get_repository() -> ProductRepository:
    """当前应用绑定的产品仓库"""
    return current_app.extensions[REPOSITORY_EXTENSION]


def _configure_logging(level_name):
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )
    logging.getLogger().setLevel(level)


def _connect_repository(app):
    """Open the MongoDB client once per process and wrap the products collection."""
    mongo = PyMongo(app, uri=app.config['MONGO_URI'])
    db = mongo.db if mongo.db is not None else mongo.cx[app.config['MONGO_DBNAME']]
    atexit.register(mongo.cx.close)
    app.logger.info("Configured MongoDB client for database %s", db.name)
    return ProductRepository(db[app.config['PRODUCTS_COLLECTION']])


def create_app(config_object=None, repository=None, seed_session=None):
    """创建 Flask 应用

    ``repository`` may be passed in (tests do this); otherwise a MongoDB
    connection is opened from the configured ``MONGO_URI``. ``seed_session``
    replaces the requests session used by /initialize.
    """
    if config_object is None:
        from config import Config
        config_object = Config

    app = Flask(__name__)
    app.config.from_object(config_object)
    _configure_logging(app.config.get('LOG_LEVEL', 'INFO'))

    # CORS: use explicit allowlist in production when provided.
    cors_origins = app.config.get('CORS_ALLOWED_ORIGINS', [])
    if cors_origins:
        CORS(app, origins=cors_origins, supports_credentials=True)
    else:
        CORS(app, origins='*')

    if repository is None:
        repository = _connect_repository(app)
    app.extensions[REPOSITORY_EXTENSION] = repository
    app.extensions[SEED_SESSION_EXTENSION] = seed_session

    # 注册蓝图
    from app.routes.main import main_bp
    from app.routes.products import products_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(products_bp, url_prefix=app.config.get('API_PREFIX', '/api/products'))

    return app
