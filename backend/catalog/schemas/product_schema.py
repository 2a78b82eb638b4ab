# backend/catalog/schemas/product_schema.py
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductFilter(BaseModel):
    name: Optional[str] = Field(None, description="matches name or description")
    category: Optional[str] = None
    sub_category: Optional[str] = None
    manufacturer: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    rating: Optional[float] = Field(None, description="minimum average rating")
    page: Optional[int] = None
    size: Optional[int] = None


class ProductRequest(BaseModel):
    """
    Registration and update payload. Every field is optional at the schema
    level: registration checks presence itself (so errors carry field codes)
    and update treats missing fields as "keep the current value".
    """

    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    price: Optional[Decimal] = None
    model: Optional[str] = None
    weight: Optional[Decimal] = None
    height: Optional[Decimal] = None
    length: Optional[Decimal] = None
    width: Optional[Decimal] = None
    manufacturer: Optional[str] = None
    supplier: Optional[str] = None
    sub_category: Optional[str] = None
    main_image: Optional[str] = None
    images: Optional[List[str]] = None
    discount: Optional[str] = None

    @field_validator("discount", mode="before")
    @classmethod
    def _discount_as_text(cls, v):
        if v is None or isinstance(v, str):
            return v
        # 10.0 and Decimal("10.00") name the same row as 10
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        if isinstance(v, Decimal) and v.is_finite() and v == v.to_integral_value():
            return str(int(v))
        return str(v)


class RatingIn(BaseModel):
    value: float


class ProductCreated(BaseModel):
    id: str


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    description: str
    color: str
    price: Decimal
    original_price: Decimal
    model: str
    weight: Decimal
    height: Decimal
    length: Decimal
    width: Decimal
    manufacturer: str
    supplier: str
    category: str
    sub_category: str
    main_image: str
    images: List[str]
    discount: str
    average_rating: Decimal
    rating_count: int
