from typing import List, Optional, Sequence

from catalog.models.discount import NO_DISCOUNT, Discount
from catalog.models.product import Product
from sqlalchemy import and_, true
from sqlalchemy.orm import Session


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, product_id: str) -> Optional[Product]:
        return self.db.get(Product, product_id)

    def find_all(self, criteria: Sequence, page: int = 0, size: int = 10) -> List[Product]:
        """
        Return one page of products matching every criterion (logical AND).
        An empty criteria list matches everything. Pages are zero-based.
        """
        query = self.db.query(Product).filter(and_(true(), *criteria))
        return query.order_by(Product.name, Product.id).offset(page * size).limit(size).all()

    def find_discounted(self) -> List[Product]:
        return (
            self.db.query(Product)
            .join(Product.discount)
            .filter(Discount.value != NO_DISCOUNT)
            .order_by(Product.name, Product.id)
            .all()
        )

    def add(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()
        return product

    def delete(self, product: Product):
        self.db.delete(product)
        self.db.flush()
