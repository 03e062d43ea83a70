from .entity_store import EntityStore
from .query_service import ProductQueryService
from .category_service import CategoryService
from .product_service import ProductService
from .variation_service import VariationService

__all__ = [
    'EntityStore',
    'ProductQueryService',
    'CategoryService',
    'ProductService',
    'VariationService'
]
