# catalog/models.py
import math

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, field_validator
from typing import Any, List, Optional, Union


class ProductBody(BaseModel):
    # create/update body check; only name and price are looked at
    model_config = ConfigDict(extra="allow")

    name: Any
    price: Union[StrictInt, StrictFloat]

    @field_validator("name")
    @classmethod
    def name_must_be_set(cls, v):
        if not v:
            raise ValueError("name is required")
        return v

    @field_validator("price")
    @classmethod
    def price_must_be_finite(cls, v):
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError("price must be finite")
        return v


class ProductIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    price: Union[int, float]
    description: Optional[str] = None
    category: Optional[str] = None
    in_stock: Optional[bool] = Field(default=None, alias="inStock")


class Product(BaseModel):
    # optional fields are stored unchecked, so they stay loosely typed here
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    name: Any
    price: Union[int, float]
    description: Any = None
    category: Any = None
    in_stock: Any = Field(default=None, alias="inStock")


class ProductPage(BaseModel):
    total: int
    page: int
    limit: int
    data: List[Product]
