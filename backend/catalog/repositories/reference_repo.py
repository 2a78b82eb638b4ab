from typing import Optional

from sqlalchemy.orm import Session

from catalog.models.category import SubCategory
from catalog.models.discount import Discount
from catalog.models.manufacturer import Manufacturer
from catalog.models.product import Product
from catalog.models.supplier import Supplier, SupplierLink


class ReferenceRepository:
    """Name lookups for the reference tables a product points at."""

    def __init__(self, db: Session):
        self.db = db

    def get_discount(self, value: str) -> Optional[Discount]:
        return self.db.query(Discount).filter(Discount.value == value).first()

    def get_manufacturer(self, name: str) -> Optional[Manufacturer]:
        return self.db.query(Manufacturer).filter(Manufacturer.name == name).first()

    def create_manufacturer(self, name: str) -> Manufacturer:
        m = Manufacturer(name=name)
        self.db.add(m)
        self.db.flush()
        return m

    def get_sub_category(self, name: str) -> Optional[SubCategory]:
        return self.db.query(SubCategory).filter(SubCategory.name == name).first()

    def get_supplier(self, name: str) -> Optional[Supplier]:
        return self.db.query(Supplier).filter(Supplier.name == name).first()

    def get_supplier_link(self, product: Product) -> Optional[SupplierLink]:
        return (
            self.db.query(SupplierLink)
            .filter(SupplierLink.product_id == product.id)
            .first()
        )

    def link_supplier(self, supplier: Supplier, product: Product) -> SupplierLink:
        link = SupplierLink(supplier_id=supplier.id, product_id=product.id)
        self.db.add(link)
        self.db.flush()
        return link

    def unlink_supplier(self, link: SupplierLink):
        self.db.delete(link)
        self.db.flush()
