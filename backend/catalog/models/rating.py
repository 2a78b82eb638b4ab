from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from catalog.db import Base


class Rating(Base):
    __tablename__ = "ratings"
    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(
        String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    value = Column(
        Numeric(2, 1), CheckConstraint("value >= 1.0 AND value <= 5.0"), nullable=False
    )

    product = relationship("Product", back_populates="ratings")
