from decimal import Decimal
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from catalog.models.product import Product
from catalog.models.rating import Rating


class RatingRepository:
    def __init__(self, db: Session):
        self.db = db

    def add(self, product: Product, value: Decimal) -> Rating:
        r = Rating(product_id=product.id, value=value)
        self.db.add(r)
        self.db.flush()
        return r

    def values_for_product(self, product_id: str) -> List[Decimal]:
        rows = self.db.query(Rating.value).filter(Rating.product_id == product_id).all()
        return [row[0] for row in rows]

    def count_for_product(self, product_id: str) -> int:
        return (
            self.db.query(func.count(Rating.id))
            .filter(Rating.product_id == product_id)
            .scalar()
            or 0
        )
