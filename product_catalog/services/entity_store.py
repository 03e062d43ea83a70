# product_catalog/services/entity_store.py
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from product_catalog.exceptions import ConstraintViolationError, NotFoundError
from product_catalog.models import Product, ProductCategory, ProductVariation
from product_catalog.utils.date_utils import next_timestamp, utcnow

logger = logging.getLogger(__name__)

# Dependent rows removed, in this order, before the parent row itself.
CASCADES = {
    Product: (
        (ProductVariation, ProductVariation.product_id),
        (ProductCategory, ProductCategory.product_id),
    ),
}


class EntityStore:
    """Single-entity persistence primitives.

    Every method works inside the caller's session; committing or rolling
    back is left to the surrounding ``session_scope()``.
    """

    def __init__(self, session: Session):
        """Initialize the entity store.

        Args:
            session: Database session
        """
        self.session = session

    def insert(self, entity):
        """Persist a new record, assigning its id and timestamps.

        Args:
            entity: Unsaved model instance

        Returns:
            The same instance, now carrying its id

        Raises:
            ConstraintViolationError: if the backend rejects a foreign key
        """
        self._stamp(entity, utcnow())
        self.session.add(entity)
        self._flush(type(entity).__name__)
        return entity

    def insert_all(self, entities: Sequence) -> List:
        """Persist several new records in one flush."""
        entities = list(entities)
        if not entities:
            return entities
        now = utcnow()
        for entity in entities:
            self._stamp(entity, now)
        self.session.add_all(entities)
        self._flush(type(entities[0]).__name__)
        return entities

    def find_by_id(self, kind, entity_id) -> Optional[Any]:
        """Get a record by primary key, or None if it does not exist."""
        return self.session.get(kind, entity_id)

    def exists(self, kind, entity_id) -> bool:
        return self.find_by_id(kind, entity_id) is not None

    def missing_ids(self, kind, entity_ids: Sequence[int]) -> List[int]:
        """Return the ids among entity_ids that have no row, in input order."""
        if not entity_ids:
            return []
        found = {
            row[0] for row in
            self.session.query(kind.id).filter(kind.id.in_(set(entity_ids))).all()
        }
        return [entity_id for entity_id in entity_ids if entity_id not in found]

    def find_all_where(
        self,
        kind,
        *criteria,
        join: Optional[Tuple] = None,
        order_by=None
    ) -> List[Any]:
        """Get all records of a kind matching the criteria.

        Args:
            kind: Model class
            criteria: SQLAlchemy filter expressions
            join: Optional (target, onclause) pair for an inner join
            order_by: Ordering; defaults to the primary key (insertion order)

        Returns:
            List of records
        """
        query = self.session.query(kind)
        if join is not None:
            query = query.join(*join)
        if criteria:
            query = query.filter(*criteria)
        if order_by is None:
            order_by = kind.__mapper__.primary_key
        else:
            order_by = [order_by]
        return query.order_by(*order_by).all()

    def update(self, kind, entity_id, changes: Dict[str, Any]):
        """Apply a partial update to one record.

        Only the keys present in ``changes`` are written. ``updated_at`` is
        refreshed on every call for kinds that carry it.

        Raises:
            NotFoundError: if no record has this id
        """
        entity = self.find_by_id(kind, entity_id)
        if entity is None:
            raise NotFoundError.for_entity(kind.__name__, entity_id)

        for field, value in changes.items():
            setattr(entity, field, value)

        if hasattr(entity, 'updated_at'):
            entity.updated_at = next_timestamp(entity.updated_at)

        self._flush(kind.__name__)
        return entity

    def delete(self, kind, entity_id) -> bool:
        """Delete one record and its cascaded dependents.

        Deleting an id that does not exist is a no-op.

        Returns:
            True if a row was removed
        """
        entity = self.find_by_id(kind, entity_id)
        if entity is None:
            return False

        for dependent, foreign_key in CASCADES.get(kind, ()):
            removed = self.delete_where(dependent, foreign_key == entity_id)
            logger.debug(f"Cascade removed {removed} {dependent.__name__} rows for {kind.__name__} {entity_id}")

        self.session.delete(entity)
        self._flush(kind.__name__)
        return True

    def delete_where(self, kind, *criteria) -> int:
        """Delete every record of a kind matching the criteria.

        Returns:
            Number of rows removed
        """
        return self.session.query(kind).filter(*criteria).delete()

    @staticmethod
    def _stamp(entity, now) -> None:
        if hasattr(entity, 'created_at') and entity.created_at is None:
            entity.created_at = now
        if hasattr(entity, 'updated_at') and entity.updated_at is None:
            entity.updated_at = now

    def _flush(self, kind_name: str) -> None:
        try:
            self.session.flush()
        except IntegrityError as e:
            logger.error(f"Integrity error writing {kind_name}: {e.orig}")
            raise ConstraintViolationError(
                f"{kind_name} write violates a database constraint",
                details={'entity': kind_name, 'reason': str(e.orig)}
            )
