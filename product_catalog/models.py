# product_catalog/models.py
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import declarative_base

from product_catalog.utils.date_utils import utcnow
from product_catalog.utils.money import Money

Base = declarative_base()


class Category(Base):
    __tablename__ = 'categories'
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'created_at': self.created_at
        }

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}')>"


class Product(Base):
    __tablename__ = 'products'
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'image_url': self.image_url,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}')>"


class ProductVariation(Base):
    __tablename__ = 'product_variations'
    __table_args__ = (
        Index('ix_product_variations_product_id', 'product_id'),
        {'sqlite_autoincrement': True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey('products.id', ondelete='CASCADE'), nullable=False)
    variation_name = Column(Text, nullable=False)
    color = Column(Text, nullable=True)
    size = Column(Text, nullable=True)
    material = Column(Text, nullable=True)
    unit_price = Column(Money, nullable=False)
    wholesale_price = Column(Money, nullable=False)
    stock_quantity = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'product_id': self.product_id,
            'variation_name': self.variation_name,
            'color': self.color,
            'size': self.size,
            'material': self.material,
            'unit_price': self.unit_price,
            'wholesale_price': self.wholesale_price,
            'stock_quantity': self.stock_quantity,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }

    def __repr__(self):
        return f"<ProductVariation(id={self.id}, product_id={self.product_id}, name='{self.variation_name}')>"


class ProductCategory(Base):
    """Many-to-many link between products and categories."""
    __tablename__ = 'product_categories'
    __table_args__ = (
        Index('ix_product_categories_category_id', 'category_id'),
    )

    product_id = Column(Integer, ForeignKey('products.id', ondelete='CASCADE'), primary_key=True)
    category_id = Column(Integer, ForeignKey('categories.id', ondelete='CASCADE'), primary_key=True)

    def __repr__(self):
        return f"<ProductCategory(product_id={self.product_id}, category_id={self.category_id})>"
