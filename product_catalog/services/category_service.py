# product_catalog/services/category_service.py
import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from product_catalog.models import Category
from product_catalog.schemas import CreateCategoryInput, UpdateCategoryInput
from product_catalog.services.entity_store import EntityStore
from product_catalog.services.query_service import ProductQueryService

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for handling category operations."""

    def __init__(self, session: Session):
        """Initialize the category service.

        Args:
            session: Database session
        """
        self.session = session
        self.store = EntityStore(session)

    def create_category(self, data: CreateCategoryInput) -> Dict:
        category = self.store.insert(
            Category(name=data.name, description=data.description)
        )
        logger.info(f"Created category {category.id} '{category.name}'")
        return category.to_dict()

    def get_categories(self) -> List[Dict]:
        return ProductQueryService(self.session).get_categories()

    def update_category(self, data: UpdateCategoryInput) -> Dict:
        """Apply the provided name/description to an existing category.

        Raises:
            NotFoundError: if the category does not exist
        """
        category = self.store.update(Category, data.id, data.changes())
        logger.info(f"Updated category {category.id}")
        return category.to_dict()

    def delete_category(self, category_id: int) -> None:
        """Delete a category; unknown ids are ignored.

        Products linked to it are left alone. Their links either go with the
        row (database-level cascade) or are skipped on the next read.
        """
        if self.store.delete(Category, category_id):
            logger.info(f"Deleted category {category_id}")
        else:
            logger.debug(f"Category {category_id} already absent")
