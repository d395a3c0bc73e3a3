# Services package
#
# Module structure:
# - product_service.py: transaction listing and monthly statistics
# - product_repository.py: thin wrapper over the MongoDB products collection
# - product_filters.py: aggregation stage factories and pipeline builder
# - product_seeder.py: one-time import of the remote dataset
# - env_utils.py: environment value cleanup used by config

from .product_service import ProductService
from .product_repository import ProductRepository
from .product_seeder import ProductSeeder, SeedResult
from . import product_filters

__all__ = [
    'ProductService',
    'ProductRepository',
    'ProductSeeder',
    'SeedResult',
    'product_filters',
]
