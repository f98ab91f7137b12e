"""
Commerce API Schemas - Per-user resources

Addresses, payment methods, shopping sessions, album listings, cart items
and orders. Every record here belongs to one user, either through its own
user_id or through its parent (cart items via shopping sessions, order items
via order details).
"""

from typing import Annotated, Optional

from pydantic import AfterValidator, Field

from music_commerce.constants import (
    BRAZIL_STATES,
    POSTAL_CODE_PATTERN,
    AlbumFormat,
    PaymentProvider,
    PaymentType,
)
from api.schemas.common import CreateModel, ObjectId, StoredOut, UpdateModel, Year


def _check_state(v: str) -> str:
    v = v.upper()
    if v not in BRAZIL_STATES:
        raise ValueError("State must be a Brazilian state code (e.g. 'SP')")
    return v


State = Annotated[str, AfterValidator(_check_state)]
PostalCode = Annotated[str, Field(pattern=POSTAL_CODE_PATTERN, description="CEP, e.g. 01310-100")]
Money = Annotated[float, Field(ge=0)]
Quantity = Annotated[int, Field(ge=1)]


# ---- User addresses ----

class UserAddressCreate(CreateModel):
    user_id: ObjectId
    street_name: str = Field(..., min_length=1)
    building_number: str = Field(..., min_length=1)
    apartment_number: Optional[str] = None
    complement: Optional[str] = None
    postal_code: PostalCode
    city: str = Field(..., min_length=1)
    state: State
    country: str = Field(..., min_length=1)


class UserAddressUpdate(UpdateModel):
    user_id: Optional[ObjectId] = None
    street_name: Optional[str] = Field(None, min_length=1)
    building_number: Optional[str] = Field(None, min_length=1)
    apartment_number: Optional[str] = None
    complement: Optional[str] = None
    postal_code: Optional[PostalCode] = None
    city: Optional[str] = Field(None, min_length=1)
    state: Optional[State] = None
    country: Optional[str] = Field(None, min_length=1)


class UserAddressOut(StoredOut):
    user_id: str
    street_name: str
    building_number: str
    apartment_number: Optional[str] = None
    complement: Optional[str] = None
    postal_code: str
    city: str
    state: str
    country: str


# ---- User payments ----

class UserPaymentCreate(CreateModel):
    user_id: ObjectId
    account_number: str = Field(..., min_length=1)
    payment_type: PaymentType
    provider: Optional[PaymentProvider] = None


class UserPaymentUpdate(UpdateModel):
    user_id: Optional[ObjectId] = None
    account_number: Optional[str] = Field(None, min_length=1)
    payment_type: Optional[PaymentType] = None
    provider: Optional[PaymentProvider] = None


class UserPaymentOut(StoredOut):
    user_id: str
    account_number: str
    payment_type: str
    provider: Optional[str] = None


# ---- Shopping sessions ----

class ShoppingSessionCreate(CreateModel):
    user_id: ObjectId
    total: Money = 0.0


class ShoppingSessionUpdate(UpdateModel):
    user_id: Optional[ObjectId] = None
    total: Optional[Money] = None


class ShoppingSessionOut(StoredOut):
    user_id: str
    total: float


# ---- Albums ----

class AlbumCreate(CreateModel):
    """A copy of a record put up for sale by a user"""

    user_id: ObjectId
    record_id: ObjectId
    description: str = Field(..., min_length=10, max_length=2000)
    stock: int = Field(..., ge=0)
    year: Optional[Year] = None
    new: bool
    price: Money
    format: AlbumFormat


class AlbumUpdate(UpdateModel):
    user_id: Optional[ObjectId] = None
    record_id: Optional[ObjectId] = None
    description: Optional[str] = Field(None, min_length=10, max_length=2000)
    stock: Optional[int] = Field(None, ge=0)
    year: Optional[Year] = None
    new: Optional[bool] = None
    price: Optional[Money] = None
    format: Optional[AlbumFormat] = None


class AlbumOut(StoredOut):
    user_id: str
    record_id: str
    description: str
    stock: int
    year: Optional[int] = None
    new: bool
    price: float
    format: str


# ---- Cart items ----

class CartItemCreate(CreateModel):
    shopping_session_id: ObjectId
    album_id: ObjectId
    quantity: Quantity


class CartItemUpdate(UpdateModel):
    shopping_session_id: Optional[ObjectId] = None
    album_id: Optional[ObjectId] = None
    quantity: Optional[Quantity] = None


class CartItemOut(StoredOut):
    shopping_session_id: str
    album_id: str
    quantity: int


# ---- Order details ----

class OrderDetailCreate(CreateModel):
    user_id: ObjectId
    user_payment_id: ObjectId
    total: Money


class OrderDetailUpdate(UpdateModel):
    user_id: Optional[ObjectId] = None
    user_payment_id: Optional[ObjectId] = None
    total: Optional[Money] = None


class OrderDetailOut(StoredOut):
    user_id: str
    user_payment_id: str
    total: float


# ---- Order items ----

class OrderItemCreate(CreateModel):
    order_detail_id: ObjectId
    album_id: ObjectId
    quantity: Quantity


class OrderItemUpdate(UpdateModel):
    order_detail_id: Optional[ObjectId] = None
    album_id: Optional[ObjectId] = None
    quantity: Optional[Quantity] = None


class OrderItemOut(StoredOut):
    order_detail_id: str
    album_id: str
    quantity: int
