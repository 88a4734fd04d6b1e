# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Union
from decimal import Decimal
from datetime import datetime


# --- katalog zewnetrzny ---

class CatalogRating(BaseModel):
    rate: float = 0.0
    count: int = 0


class CatalogProduct(BaseModel):
    """Produkt z publicznego katalogu. Zly ksztalt odpowiedzi = blad walidacji."""

    id: int
    title: str
    price: Decimal = Field(..., ge=0)
    category: str
    description: str = ""
    image: str = ""
    rating: CatalogRating = Field(default_factory=CatalogRating)


# --- produkty sklepu (panel admina) ---

class ProductCreate(BaseModel):
    """Schema dla dodawania produktu przez admina."""

    name: str = Field(..., min_length=1, max_length=200)
    category: str | None = Field(default=None, max_length=100)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    description: str = Field(..., min_length=1)
    image_url: str = Field(..., min_length=1)


class ProductUpdate(BaseModel):
    """Czesciowa aktualizacja - tylko podane pola."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    category: str | None = Field(default=None, max_length=100)
    price: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    description: str | None = Field(default=None, min_length=1)
    image_url: str | None = Field(default=None, min_length=1)


class ProductOut(BaseModel):
    id: str
    name: str
    category: str | None = None
    price: Decimal
    description: str
    image_url: str

    model_config = ConfigDict(from_attributes=True)


# --- koszyk ---

class ItemIn(BaseModel):
    """
    Schema dla dodawania produktu do koszyka.
    int -> produkt z katalogu, str -> produkt sklepu.
    """

    product_id: Union[int, str]
    quantity: int = Field(default=1, gt=0, description="Ilosc produktu (musi byc > 0)")


class QuantityIn(BaseModel):
    """Ustawienie ilosci wprost; <= 0 usuwa pozycje."""

    quantity: int


class CartItemOut(BaseModel):
    id: Union[int, str]
    title: str
    price: Decimal
    quantity: int
    subtotal: Decimal
    image: str | None = None


class CartOut(BaseModel):
    session_id: str
    items: List[CartItemOut]
    item_count: int
    total_items: int
    total: Decimal


# --- uzytkownicy ---

class UserCreate(BaseModel):
    """Schema dla tworzenia użytkownika."""

    id: int = Field(..., gt=0, description="ID użytkownika (musi być > 0)")
    name: str = Field(..., min_length=1, max_length=100)
    email: str | None = Field(default=None, max_length=200)
    address: str | None = None
    is_admin: bool = False


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    address: str | None = None


class UserRead(BaseModel):
    id: int
    name: str
    email: str | None = None
    address: str | None = None
    is_admin: bool = False

    model_config = ConfigDict(from_attributes=True)


# --- zamowienia ---

class OrderCreate(BaseModel):
    """Schema dla zlozenia zamowienia z koszyka sesji."""

    session_id: str = Field(..., min_length=1)
    user_id: int = Field(..., gt=0)
    shipping_address: str | None = None


class ShippingAddressIn(BaseModel):
    shipping_address: str = Field(..., min_length=1)


class OrderItemOut(BaseModel):
    product_id: str
    title: str
    price: Decimal
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: int
    user_id: int | None = None
    status: str
    total: Decimal
    shipping_address: str | None = None
    created_at: datetime
    items: List[OrderItemOut] = []

    model_config = ConfigDict(from_attributes=True)
