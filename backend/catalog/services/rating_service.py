from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from catalog.exceptions import InvalidRating
from catalog.models.product import Product
from catalog.models.rating import Rating
from catalog.repositories.rating_repo import RatingRepository
from catalog.utils.logs import get_logger
from catalog.utils.validation import to_decimal

log = get_logger("catalog.ratings")

MIN_RATING = Decimal("1.0")
MAX_RATING = Decimal("5.0")
TWO = Decimal(2)


def round_to_half(value) -> Decimal:
    """Round to the nearest 0.5: round_half_up(value * 2) / 2."""
    doubled = (to_decimal(value) * TWO).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return (doubled / TWO).quantize(Decimal("0.1"))


def average_rating(values: Iterable) -> Decimal:
    """Mean of the given ratings rounded to the nearest 0.5; 0 when there are none."""
    numbers = [to_decimal(v) for v in values]
    if not numbers:
        return Decimal("0.0")
    return round_to_half(sum(numbers) / len(numbers))


class RatingService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = RatingRepository(db)

    def submit(self, product: Product, value) -> Rating:
        try:
            number = to_decimal(value)
        except ValueError:
            raise InvalidRating()
        if number is None or not number.is_finite() or number < MIN_RATING or number > MAX_RATING:
            raise InvalidRating()
        r = self.repo.add(product, round_to_half(number))
        log.info(f"rating stored product={product.id} value={r.value}")
        return r

    def count(self, product: Product) -> int:
        return self.repo.count_for_product(product.id)

    def recompute_and_persist_average(self, product: Product) -> Decimal:
        """
        Recompute the product's average from its stored ratings and write it to
        the product row. Idempotent; the caller owns the commit.
        """
        avg = average_rating(self.repo.values_for_product(product.id))
        if product.average_rating is None or to_decimal(product.average_rating) != avg:
            product.average_rating = avg
            self.db.flush()
        return avg

    def resync_all(self) -> int:
        """Recompute every product's stored average. Returns how many rows changed."""
        changed = 0
        for product in self.db.query(Product).all():
            before: Optional[Decimal] = product.average_rating
            after = self.recompute_and_persist_average(product)
            if before is None or to_decimal(before) != after:
                changed += 1
        self.db.commit()
        return changed
