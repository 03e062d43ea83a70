# product_catalog/services/variation_service.py
import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from product_catalog.exceptions import InvalidReferenceError
from product_catalog.models import Product, ProductVariation
from product_catalog.schemas import CreateProductVariationInput, UpdateProductVariationInput
from product_catalog.services.entity_store import EntityStore
from product_catalog.services.query_service import ProductQueryService

logger = logging.getLogger(__name__)


class VariationService:
    """Service for handling product variation operations."""

    def __init__(self, session: Session):
        """Initialize the variation service.

        Args:
            session: Database session
        """
        self.session = session
        self.store = EntityStore(session)

    def create_variation(self, data: CreateProductVariationInput) -> Dict:
        """Create a variation under an existing product.

        The parent product is looked up before the insert; the backend's
        foreign key is not relied upon.

        Raises:
            InvalidReferenceError: if the product does not exist
        """
        if not self.store.exists(Product, data.product_id):
            logger.warning(f"Rejected variation for missing product {data.product_id}")
            raise InvalidReferenceError.for_entity('Product', data.product_id, field='product_id')

        variation = self.store.insert(
            ProductVariation(
                product_id=data.product_id,
                variation_name=data.variation_name,
                color=data.color,
                size=data.size,
                material=data.material,
                unit_price=data.unit_price,
                wholesale_price=data.wholesale_price,
                stock_quantity=data.stock_quantity
            )
        )
        logger.info(f"Created variation {variation.id} '{variation.variation_name}' for product {variation.product_id}")
        return variation.to_dict()

    def get_variations(self, product_id: int) -> List[Dict]:
        return ProductQueryService(self.session).get_product_variations(product_id)

    def update_variation(self, data: UpdateProductVariationInput) -> Dict:
        """Apply the provided fields to a variation and refresh updated_at.

        Raises:
            NotFoundError: if the variation does not exist
        """
        changes = data.changes()
        variation = self.store.update(ProductVariation, data.id, changes)
        logger.info(f"Updated variation {variation.id} fields: {sorted(changes)}")
        return variation.to_dict()

    def delete_variation(self, variation_id: int) -> None:
        """Delete a variation; unknown ids are ignored."""
        if self.store.delete(ProductVariation, variation_id):
            logger.info(f"Deleted variation {variation_id}")
        else:
            logger.debug(f"Variation {variation_id} already absent")
