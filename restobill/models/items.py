# restobill/models/items.py

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class ItemIn(BaseModel):
    name_local: str
    name_common: str
    price: Decimal
    category: Optional[str] = None
    image_ref: Optional[str] = None


class ItemStatusIn(BaseModel):
    is_active: bool


class ItemOut(BaseModel):
    id: int
    name_local: str
    name_common: str
    price: Decimal
    category: str
    image_ref: Optional[str] = None
    is_active: bool


class Created(BaseModel):
    id: int
