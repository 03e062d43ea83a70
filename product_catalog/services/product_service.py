# product_catalog/services/product_service.py
import logging
from typing import Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from product_catalog.exceptions import InvalidReferenceError, NotFoundError
from product_catalog.models import Category, Product, ProductCategory
from product_catalog.schemas import CreateProductInput, UpdateProductInput
from product_catalog.services.entity_store import EntityStore
from product_catalog.services.query_service import ProductQueryService

logger = logging.getLogger(__name__)


def unique_ids(ids: Sequence[int]) -> List[int]:
    """Drop repeated ids, keeping first-occurrence order."""
    return list(dict.fromkeys(ids))


class ProductService:
    """Service for product operations that span products, categories and links.

    Each method expects to run inside a single ``session_scope()``; any
    exception it raises leaves the transaction to be rolled back whole.
    """

    def __init__(self, session: Session):
        """Initialize the product service.

        Args:
            session: Database session
        """
        self.session = session
        self.store = EntityStore(session)
        self.queries = ProductQueryService(session)

    def create_product(self, data: CreateProductInput) -> Dict:
        """Create a product and link it to the given categories.

        Every category id is checked before anything is written.

        Returns:
            Product view with its categories and an empty variation list

        Raises:
            InvalidReferenceError: if a category id does not exist
        """
        category_ids = unique_ids(data.category_ids or [])
        self._require_categories(category_ids)

        product = self.store.insert(
            Product(
                name=data.name,
                description=data.description,
                image_url=data.image_url
            )
        )
        self._link_categories(product.id, category_ids)

        logger.info(f"Created product {product.id} '{product.name}' with {len(category_ids)} categories")
        return self.queries.product_view(
            product, self.queries.get_product_categories(product.id), []
        )

    def update_product(self, data: UpdateProductInput) -> Dict:
        """Apply a partial update to a product.

        Scalar fields change only when provided. A provided ``category_ids``
        (even empty) replaces the whole category set; an omitted one leaves
        it untouched. The returned view always has an empty ``variations``
        list; callers that need variations read the product again.

        Raises:
            NotFoundError: if the product does not exist
            InvalidReferenceError: if a category id does not exist
        """
        if not self.store.exists(Product, data.id):
            raise NotFoundError.for_entity('Product', data.id)

        changes = data.changes()
        category_ids = changes.pop('category_ids', None)

        if category_ids is not None:
            category_ids = unique_ids(category_ids)
            self._require_categories(category_ids)

        product = self.store.update(Product, data.id, changes)

        if category_ids is not None:
            removed = self.store.delete_where(ProductCategory, ProductCategory.product_id == product.id)
            self._link_categories(product.id, category_ids)
            logger.info(f"Replaced {removed} category links of product {product.id} with {len(category_ids)}")

        logger.info(f"Updated product {product.id} fields: {sorted(changes)}")
        return self.queries.product_view(
            product, self.queries.get_product_categories(product.id), []
        )

    def delete_product(self, product_id: int) -> None:
        """Delete a product with its variations and category links.

        Unknown ids are ignored. Categories are never deleted.
        """
        if self.store.delete(Product, product_id):
            logger.info(f"Deleted product {product_id}")
        else:
            logger.debug(f"Product {product_id} already absent")

    def get_products(self) -> List[Dict]:
        return self.queries.get_products()

    def get_product(self, product_id: int) -> Optional[Dict]:
        return self.queries.get_product_by_id(product_id)

    def _require_categories(self, category_ids: List[int]) -> None:
        missing = self.store.missing_ids(Category, category_ids)
        if missing:
            logger.warning(f"Rejected category ids {missing}: no such category")
            raise InvalidReferenceError(
                f"Category with id {missing[0]} does not exist",
                details={'entity': 'Category', 'id': missing[0], 'missing_ids': missing, 'field': 'category_ids'}
            )

    def _link_categories(self, product_id: int, category_ids: List[int]) -> None:
        self.store.insert_all(
            ProductCategory(product_id=product_id, category_id=category_id)
            for category_id in category_ids
        )
