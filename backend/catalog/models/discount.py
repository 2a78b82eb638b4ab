from sqlalchemy import Column, Integer, String
from catalog.db import Base

NO_DISCOUNT = "0"


class Discount(Base):
    """Discount percentage stored as text; "0" is the no-discount sentinel."""

    __tablename__ = "discounts"

    id = Column(Integer, primary_key=True, index=True)
    value = Column(String(3), unique=True, index=True, nullable=False)

    def __repr__(self):
        return f"<Discount {self.value}%>"
