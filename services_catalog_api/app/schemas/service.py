"""
Pydantic models for service records.

``ServiceCreate`` validates the multipart form of ``POST /services``.
Stored records are plain JSON documents (the raw insert route accepts
arbitrary shapes), so listing returns dictionaries rather than a
response model.
"""

from decimal import Decimal, InvalidOperation
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class ServiceCreate(BaseModel):
    """Schema for the validated create route."""

    name: str = Field(..., example="Стрижка")
    price: str = Field(..., example="500")
    description: List[str] = Field(..., example=["Мужская стрижка"])

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v

    @field_validator("price")
    @classmethod
    def price_positive(cls, v: str) -> str:
        # Stored as submitted; only checked for being a positive number.
        try:
            value = Decimal(v.strip())
        except InvalidOperation:
            raise ValueError("price must be a number")
        if not value.is_finite() or value <= 0:
            raise ValueError("price must be positive")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def normalize_description(cls, v: Union[str, List[str], None]) -> List[str]:
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        return [item for item in v if isinstance(item, str) and item.strip()]

    @field_validator("description")
    @classmethod
    def description_not_empty(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("description must contain at least one entry")
        return v


class ServiceRead(BaseModel):
    """Shape of a record created through the validated route."""

    id: str = Field(..., alias="_id")
    name: str
    description: List[str]
    price: str
    photo: Optional[str] = Field(None, example="/uploads/1700000000000-123456789.jpg")
    createdAt: str

    model_config = {
        "populate_by_name": True,
    }


class DeleteResult(BaseModel):
    message: str
