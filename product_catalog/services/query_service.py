# product_catalog/services/query_service.py
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from product_catalog.models import Category, Product, ProductCategory, ProductVariation
from product_catalog.services.entity_store import EntityStore


class ProductQueryService:
    """Builds the "product with relations" read views.

    Relations are resolved with explicit queries: one join through
    product_categories for categories and one lookup by product_id for
    variations, batched over all requested products. Links pointing at a
    category row that no longer exists drop out of the inner join.
    """

    def __init__(self, session: Session):
        """Initialize the query service.

        Args:
            session: Database session
        """
        self.session = session
        self.store = EntityStore(session)

    def get_products(self) -> List[Dict]:
        """Get every product with its categories and variations, in insertion order."""
        products = self.store.find_all_where(Product)
        return self._with_relations(products)

    def get_product_by_id(self, product_id: int) -> Optional[Dict]:
        """Get one product with its relations, or None if it does not exist."""
        product = self.store.find_by_id(Product, product_id)
        if product is None:
            return None
        return self._with_relations([product])[0]

    def get_product_variations(self, product_id: int) -> List[Dict]:
        """Get the variations of a product.

        An unknown product id yields an empty list, same as a product
        without variations.
        """
        variations = self.store.find_all_where(
            ProductVariation, ProductVariation.product_id == product_id
        )
        return [variation.to_dict() for variation in variations]

    def get_categories(self) -> List[Dict]:
        """Get every category in insertion order."""
        return [category.to_dict() for category in self.store.find_all_where(Category)]

    def get_product_categories(self, product_id: int) -> List[Dict]:
        """Get the live categories linked to one product."""
        categories = self.store.find_all_where(
            Category,
            ProductCategory.product_id == product_id,
            join=(ProductCategory, ProductCategory.category_id == Category.id)
        )
        return [category.to_dict() for category in categories]

    def product_view(self, product: Product, categories: List[Dict], variations: List[Dict]) -> Dict:
        view = product.to_dict()
        view['categories'] = categories
        view['variations'] = variations
        return view

    def _with_relations(self, products: Sequence[Product]) -> List[Dict]:
        if not products:
            return []

        product_ids = [product.id for product in products]
        categories = self._categories_by_product(product_ids)
        variations = self._variations_by_product(product_ids)

        return [
            self.product_view(
                product,
                categories.get(product.id, []),
                variations.get(product.id, [])
            )
            for product in products
        ]

    def _categories_by_product(self, product_ids: Sequence[int]) -> Dict[int, List[Dict]]:
        rows = (
            self.session.query(ProductCategory.product_id, Category)
            .join(Category, Category.id == ProductCategory.category_id)
            .filter(ProductCategory.product_id.in_(product_ids))
            .order_by(ProductCategory.product_id, Category.id)
            .all()
        )

        grouped = defaultdict(list)
        for product_id, category in rows:
            grouped[product_id].append(category.to_dict())
        return grouped

    def _variations_by_product(self, product_ids: Sequence[int]) -> Dict[int, List[Dict]]:
        variations = self.store.find_all_where(
            ProductVariation, ProductVariation.product_id.in_(product_ids)
        )

        grouped = defaultdict(list)
        for variation in variations:
            grouped[variation.product_id].append(variation.to_dict())
        return grouped
