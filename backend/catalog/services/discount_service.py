from typing import Optional

from sqlalchemy.orm import Session

from catalog.exceptions import InvalidDiscount
from catalog.models.discount import NO_DISCOUNT, Discount
from catalog.repositories.reference_repo import ReferenceRepository


class DiscountResolver:
    """Maps a percentage string onto an existing discount row. Never creates rows."""

    def __init__(self, db: Session):
        self.repo = ReferenceRepository(db)

    def resolve(self, value: Optional[str]) -> Discount:
        """None means no discount; any other value must match an existing row."""
        key = NO_DISCOUNT if value is None else value.strip()
        discount = self.repo.get_discount(key)
        if discount is None:
            raise InvalidDiscount()
        return discount
