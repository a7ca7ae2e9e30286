"""
Request schemas

Each model describes the JSON body accepted for one collection. Unknown fields
are rejected so request bodies are never written to MongoDB verbatim.

- User -> "users" collection
- Product -> "product" collection
- Review -> "reviews" collection
- CartItem -> "carts" collection
- Payment -> "payments" collection
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

BookingStatus = Literal["pending", "confirmed", "completed", "canceled"]
BOOKING_STATUSES = get_args(BookingStatus)


def normalize_email(value: Optional[str]) -> str:
    return str(value or "").strip().lower()


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # MongoDB hands back naive UTC datetimes; store them the same way.
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class Schema(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class TokenRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: EmailStr

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return normalize_email(value)


class User(Schema):
    email: EmailStr = Field(..., description="Unique business key")
    name: Optional[str] = None
    photo: Optional[str] = Field(None, description="Avatar URL")

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return normalize_email(value)


class Product(Schema):
    name: str = Field(..., min_length=1)
    gender: Optional[str] = None
    category: str = Field(..., min_length=1)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    brand: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


class ProductUpdate(Schema):
    """Full replacement of the editable product fields; omitted ones become null."""

    name: Optional[str] = None
    gender: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    brand: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None

    def to_update(self) -> Dict[str, Any]:
        return self.model_dump()


class Review(Schema):
    productId: str = Field(..., min_length=1)
    review: str = Field(..., min_length=1)
    date: datetime = Field(default_factory=utc_now)
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    photo: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)

    @field_validator("date")
    @classmethod
    def store_naive_utc(cls, value: datetime) -> datetime:
        return as_naive_utc(value)


class ReviewEdit(Schema):
    review: str = Field(..., min_length=1)


class CartItem(Schema):
    email: EmailStr
    productId: Optional[str] = None
    name: Optional[str] = None
    gender: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    image: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    description: Optional[str] = None
    quantity: int = Field(1, ge=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return normalize_email(value)


class Payment(Schema):
    email: EmailStr
    price: float = Field(..., ge=0, allow_inf_nan=False)
    transactionId: Optional[str] = None
    date: datetime = Field(default_factory=utc_now)
    cartIds: List[str]
    productItemIds: List[str] = Field(default_factory=list)
    status: BookingStatus = "pending"

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("date")
    @classmethod
    def store_naive_utc(cls, value: datetime) -> datetime:
        return as_naive_utc(value)


class BookingStatusUpdate(Schema):
    status: BookingStatus


class PaymentIntentRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    price: float = Field(..., ge=0, allow_inf_nan=False)
