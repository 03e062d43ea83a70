"""Catalog operations for callers outside this package.

Each function validates its input, runs in exactly one ``session_scope()``
transaction, and returns plain dictionaries (or None). Errors propagate as
``CatalogError`` subclasses; nothing is written when one is raised.
"""
from typing import Dict, List, Optional

from product_catalog.db import db, session_scope
from product_catalog.schemas import (
    UNSET,
    CreateCategoryInput, UpdateCategoryInput,
    CreateProductInput, UpdateProductInput,
    CreateProductVariationInput, UpdateProductVariationInput
)
from product_catalog.services import CategoryService, ProductService, VariationService
from product_catalog.utils.date_utils import utcnow


# Categories

def create_category(name, description=None) -> Dict:
    data = CreateCategoryInput.parse(name=name, description=description)
    with session_scope() as session:
        return CategoryService(session).create_category(data)


def list_categories() -> List[Dict]:
    with session_scope() as session:
        return CategoryService(session).get_categories()


def update_category(category_id, name=UNSET, description=UNSET) -> Dict:
    data = UpdateCategoryInput.parse(id=category_id, name=name, description=description)
    with session_scope() as session:
        return CategoryService(session).update_category(data)


def delete_category(category_id) -> None:
    with session_scope() as session:
        CategoryService(session).delete_category(category_id)


# Products

def create_product(name, description=None, image_url=None, category_ids=None) -> Dict:
    data = CreateProductInput.parse(
        name=name, description=description, image_url=image_url, category_ids=category_ids
    )
    with session_scope() as session:
        return ProductService(session).create_product(data)


def list_products() -> List[Dict]:
    with session_scope() as session:
        return ProductService(session).get_products()


def get_product(product_id) -> Optional[Dict]:
    with session_scope() as session:
        return ProductService(session).get_product(product_id)


def update_product(product_id, name=UNSET, description=UNSET, image_url=UNSET, category_ids=UNSET) -> Dict:
    """Partially update a product.

    Omitted arguments are left as they are. The result's ``variations`` is
    always empty; use get_product() for the full view.
    """
    data = UpdateProductInput.parse(
        id=product_id, name=name, description=description,
        image_url=image_url, category_ids=category_ids
    )
    with session_scope() as session:
        return ProductService(session).update_product(data)


def delete_product(product_id) -> None:
    with session_scope() as session:
        ProductService(session).delete_product(product_id)


# Product variations

def create_product_variation(
    product_id,
    variation_name,
    unit_price,
    wholesale_price,
    stock_quantity,
    color=None,
    size=None,
    material=None
) -> Dict:
    data = CreateProductVariationInput.parse(
        product_id=product_id,
        variation_name=variation_name,
        color=color,
        size=size,
        material=material,
        unit_price=unit_price,
        wholesale_price=wholesale_price,
        stock_quantity=stock_quantity
    )
    with session_scope() as session:
        return VariationService(session).create_variation(data)


def list_product_variations(product_id) -> List[Dict]:
    with session_scope() as session:
        return VariationService(session).get_variations(product_id)


def update_product_variation(variation_id, **fields) -> Dict:
    """Partially update a variation.

    Accepts any of variation_name, color, size, material, unit_price,
    wholesale_price and stock_quantity as keyword arguments.
    """
    data = UpdateProductVariationInput.parse(id=variation_id, **fields)
    with session_scope() as session:
        return VariationService(session).update_variation(data)


def delete_product_variation(variation_id) -> None:
    with session_scope() as session:
        VariationService(session).delete_variation(variation_id)


def healthcheck() -> Dict:
    """Report service status after pinging the database.

    Raises:
        DatabaseError: if the database cannot be reached
    """
    db.health_check()
    return {'status': 'ok', 'timestamp': utcnow().isoformat(), 'database': 'ok'}
