# storefront/models.py
from pydantic import BaseModel, Field
from typing import Any, List, Optional


class Product(BaseModel):
    id: int = Field(..., ge=1)
    title: str
    description: str
    code: str
    price: float = Field(..., ge=0)
    status: bool
    stock: int = Field(..., ge=0)
    category: str
    thumbnails: Optional[str] = None


class LineItem(BaseModel):
    product: int
    quantity: int = Field(..., ge=1)


class Cart(BaseModel):
    id: int = Field(..., ge=1)
    products: List[LineItem]


class Envelope(BaseModel):
    status: str
    message: str
    data: Any = None
