from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from catalog.db import Base


class Supplier(Base):
    __tablename__ = "suppliers"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, index=True, nullable=False)


class SupplierLink(Base):
    """Join row between a product and the single supplier that provides it."""

    __tablename__ = "supplier_links"
    id = Column(Integer, primary_key=True, autoincrement=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False, index=True)
    product_id = Column(
        String(36), ForeignKey("products.id"), unique=True, nullable=False, index=True
    )

    supplier = relationship("Supplier")
    product = relationship("Product")
