from pydantic import BaseModel, Field
from typing import Optional

# Request schemas and the error types raised by the stores.

REQUIRED_PRODUCT_FIELDS = ("title", "description", "code", "price", "status", "stock", "category")


class ProductIn(BaseModel):
    title: str
    description: str
    code: str
    price: float = Field(..., ge=0)
    status: bool
    stock: int = Field(..., ge=0)
    category: str
    thumbnails: Optional[str] = None


class ProductUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    code: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    status: Optional[bool] = None
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[str] = None
    thumbnails: Optional[str] = None


class StoreError(Exception):
    """Base class for every failure a store operation reports to its caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidIdError(StoreError):
    pass


class NotFoundError(StoreError):
    pass


class ProductNotFoundError(NotFoundError):
    pass


class CartNotFoundError(NotFoundError):
    pass


class InsufficientStockError(StoreError):
    pass


class InvalidProductError(StoreError):
    pass


def parse_id(value, name: str) -> int:
    """
    Accepts a positive int or its decimal string (path params arrive as str).
    Raises InvalidIdError for anything else, including bools and zero.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidIdError(f"The {name} is {value}, when it should be an int")
    if isinstance(value, int):
        ident = value
    else:
        text = str(value).strip()
        if not text.isdecimal():
            raise InvalidIdError(f"The {name} is {value}, when it should be an int")
        ident = int(text)
    if ident < 1:
        raise InvalidIdError(f"The {name} is {value}, when it should be a positive int")
    return ident


def next_id(items) -> int:
    return max((item["id"] for item in items), default=0) + 1
