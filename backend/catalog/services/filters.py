"""
Composable product filters.

Each step looks at one part of a ``ProductFilter`` and either returns a
SQLAlchemy criterion or ``None`` when its input is absent. Steps run in a
fixed order and the criteria that are produced are ANDed by the repository.
"""
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from sqlalchemy import or_

from catalog.config import settings
from catalog.models.category import Category, SubCategory
from catalog.models.manufacturer import Manufacturer
from catalog.models.product import Product
from catalog.schemas.product_schema import ProductFilter
from catalog.utils.validation import is_blank


@dataclass
class FilterPlan:
    criteria: List = field(default_factory=list)
    applied: List[str] = field(default_factory=list)
    page: int = 0
    size: int = 10


def _name_or_description(f: ProductFilter):
    if is_blank(f.name):
        return None
    like = f"%{f.name.strip()}%"
    return or_(Product.name.ilike(like), Product.description.ilike(like))


def _category(f: ProductFilter):
    if is_blank(f.category):
        return None
    return Product.sub_category.has(SubCategory.category.has(Category.name == f.category.strip()))


def _sub_category(f: ProductFilter):
    if is_blank(f.sub_category):
        return None
    return Product.sub_category.has(SubCategory.name == f.sub_category.strip())


def _manufacturer(f: ProductFilter):
    if is_blank(f.manufacturer):
        return None
    return Product.manufacturer.has(Manufacturer.name == f.manufacturer.strip())


def price_bounds(f: ProductFilter) -> Optional[Tuple[float, float]]:
    """
    Both bounds given -> (min, max). Only max -> (0, max).
    Only min -> no price filter at all.
    """
    has_min = f.min_price is not None and f.min_price >= 0
    has_max = f.max_price is not None and f.max_price >= 0
    if has_min and has_max:
        return f.min_price, f.max_price
    if f.min_price is None and has_max:
        return 0, f.max_price
    return None


def _price(f: ProductFilter):
    bounds = price_bounds(f)
    if bounds is None:
        return None
    return Product.price.between(*bounds)


def _rating(f: ProductFilter):
    if f.rating is None or f.rating < 0:
        return None
    return Product.average_rating >= f.rating


STEPS: List[Tuple[str, Callable]] = [
    ("name", _name_or_description),
    ("category", _category),
    ("sub_category", _sub_category),
    ("manufacturer", _manufacturer),
    ("price", _price),
    ("rating", _rating),
]


def build_filter(f: ProductFilter) -> FilterPlan:
    plan = FilterPlan(
        page=f.page if f.page is not None and f.page > 0 else 0,
        size=f.size if f.size is not None and f.size > 0 else settings.DEFAULT_PAGE_SIZE,
    )
    for name, step in STEPS:
        criterion = step(f)
        if criterion is not None:
            plan.criteria.append(criterion)
            plan.applied.append(name)
    return plan
