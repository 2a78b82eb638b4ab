from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from catalog.db import Base


def _new_id() -> str:
    return str(uuid4())


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=False)
    color = Column(String(30), nullable=False)

    # base_price is the undiscounted reference; price is what the customer pays
    base_price = Column(Numeric(10, 2), CheckConstraint("base_price >= 0"), nullable=False)
    price = Column(Numeric(10, 2), CheckConstraint("price >= 0"), nullable=False, index=True)

    model = Column(String(30), nullable=False)
    weight = Column(Numeric(8, 2), nullable=False)
    height = Column(Numeric(8, 2), nullable=False)
    length = Column(Numeric(8, 2), nullable=False)
    width = Column(Numeric(8, 2), nullable=False)

    manufacturer_id = Column(Integer, ForeignKey("manufacturers.id"), nullable=False)
    sub_category_id = Column(Integer, ForeignKey("sub_categories.id"), nullable=False)
    main_image_id = Column(Integer, ForeignKey("main_images.id"), nullable=False)
    discount_id = Column(Integer, ForeignKey("discounts.id"), nullable=False)

    # null until the first aggregation
    average_rating = Column(Numeric(2, 1), nullable=True, index=True)

    manufacturer = relationship("Manufacturer")
    sub_category = relationship("SubCategory")
    main_image = relationship("MainImage", cascade="all, delete-orphan", single_parent=True)
    discount = relationship("Discount")
    ratings = relationship("Rating", back_populates="product", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Product id={self.id} name={self.name}>"
