"""
Pydantic models for payment and donation requests.

Field names follow what the catalog frontend sends (``itemsList``,
``full_name``).  Numbers may arrive as JSON numbers or numeric
strings; both are parsed into ``Decimal`` so the gateway amounts are
formatted without float rounding surprises.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class Customer(BaseModel):
    full_name: str = Field(..., example="Иван Иванов")
    phone: str = Field(..., example="+79990000000")


class PaymentItem(BaseModel):
    name: str = Field(..., example="Стрижка")
    price: Decimal = Field(..., gt=0, example="5500")
    quantity: Decimal = Field(Decimal("1"), gt=0, example=1)


class PaymentCreate(BaseModel):
    """Schema for ``POST /create-payment``."""

    customer: Customer
    description: Optional[str] = Field(None, example="Оплата услуг")
    itemsList: List[PaymentItem] = Field(..., min_length=1)


class DonationCreate(BaseModel):
    """Schema for ``POST /create-donation``."""

    customer: Customer
    amount: Decimal = Field(..., gt=0, example=500)


class PaymentRedirect(BaseModel):
    confirmation_url: str
