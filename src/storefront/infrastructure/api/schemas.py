"""Request and response bodies of the HTTP API.

Field names are camelCase on the wire and snake_case in Python.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from storefront.application.dto import (
    BranchChanges,
    DeliverySpec,
    OrderLineSpec,
    PickupSpec,
    PlaceOrderRequest,
    ProductChanges,
    ProductSpec,
    SizeSpec,
    UserChanges,
    VariantSpec,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ----------------------- Requests -----------------------

class SizeIn(CamelModel):
    id: Optional[str] = Field(None, alias="_id")
    name: str
    stock: int = Field(0, ge=0)

    def to_spec(self) -> SizeSpec:
        return SizeSpec(name=self.name, stock=self.stock, id=self.id)


class VariantIn(CamelModel):
    id: Optional[str] = Field(None, alias="_id")
    color: str
    color_hex: Optional[str] = None
    sizes: List[SizeIn] = Field(..., min_length=1)
    is_default: bool = False

    def to_spec(self) -> VariantSpec:
        return VariantSpec(
            color=self.color,
            sizes=[s.to_spec() for s in self.sizes],
            color_hex=self.color_hex,
            is_default=self.is_default,
            id=self.id,
        )


class ProductIn(CamelModel):
    name: str = Field(..., max_length=200)
    description: str
    base_price: float = Field(..., ge=0)
    main_category: str
    categories: List[str] = []
    brand: Optional[str] = None
    discount_percentage: float = Field(0, ge=0, le=100)
    discount_end_date: Optional[datetime] = None
    variants: List[VariantIn] = []
    stock: int = Field(0, ge=0)

    def to_spec(self) -> ProductSpec:
        return ProductSpec(
            name=self.name,
            description=self.description,
            base_price=self.base_price,
            main_category=self.main_category,
            categories=list(self.categories),
            brand=self.brand,
            discount_percentage=self.discount_percentage,
            discount_end_date=self.discount_end_date,
            variants=[v.to_spec() for v in self.variants],
            stock=self.stock,
        )


class ProductUpdateIn(CamelModel):
    name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    base_price: Optional[float] = Field(None, ge=0)
    main_category: Optional[str] = None
    categories: Optional[List[str]] = None
    brand: Optional[str] = None
    discount_percentage: Optional[float] = Field(None, ge=0, le=100)
    discount_end_date: Optional[datetime] = None
    variants: Optional[List[VariantIn]] = None
    stock: Optional[int] = Field(None, ge=0)

    def to_changes(self) -> ProductChanges:
        return ProductChanges(
            name=self.name,
            description=self.description,
            base_price=self.base_price,
            main_category=self.main_category,
            categories=self.categories,
            brand=self.brand,
            discount_percentage=self.discount_percentage,
            discount_end_date=self.discount_end_date,
            variants=[v.to_spec() for v in self.variants] if self.variants is not None else None,
            stock=self.stock,
            clear_discount_end_date=(
                "discount_end_date" in self.model_fields_set
                and self.discount_end_date is None
            ),
        )


class StockUpdateIn(CamelModel):
    color_id: str
    size_id: str
    quantity: int


class OrderLineIn(CamelModel):
    product_id: Optional[str] = None
    quantity: Optional[int] = None


class PickupIn(CamelModel):
    store_id: Optional[str] = None


class DeliveryIn(CamelModel):
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    phone_number: Optional[str] = None


class OrderIn(CamelModel):
    customer: Optional[str] = None
    products: Optional[List[OrderLineIn]] = None
    status: Optional[str] = None
    order_id: Optional[int] = None
    total_price: Optional[float] = None
    amount: Optional[int] = None
    order_type: Optional[str] = None
    pickup_details: Optional[PickupIn] = None
    delivery_details: Optional[DeliveryIn] = None

    def to_request(self) -> PlaceOrderRequest:
        return PlaceOrderRequest(
            customer=self.customer,
            products=(
                [OrderLineSpec(p.product_id, p.quantity) for p in self.products]
                if self.products is not None else None
            ),
            status=self.status,
            order_id=self.order_id,
            total_price=self.total_price,
            amount=self.amount,
            order_type=self.order_type,
            pickup_details=(
                PickupSpec(self.pickup_details.store_id)
                if self.pickup_details else None
            ),
            delivery_details=(
                DeliverySpec(**self.delivery_details.model_dump())
                if self.delivery_details else None
            ),
        )


class OrderStatusIn(CamelModel):
    status: str


class UserIn(CamelModel):
    phone_number: str
    first_name: str
    last_name: str
    password: str
    role: str = "client"
    avatar: Optional[str] = None


class UserUpdateIn(CamelModel):
    phone_number: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None
    password: Optional[str] = None

    def to_changes(self) -> UserChanges:
        return UserChanges(**self.model_dump())


class WorkTimeIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    opens: str = Field(..., alias="from")
    closes: str = Field(..., alias="to")


class BranchIn(CamelModel):
    name: str
    address: str
    location: str
    phone_number: str
    worktime: WorkTimeIn


class WorkTimeUpdateIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    opens: Optional[str] = Field(None, alias="from")
    closes: Optional[str] = Field(None, alias="to")


class BranchUpdateIn(CamelModel):
    name: Optional[str] = None
    address: Optional[str] = None
    location: Optional[str] = None
    phone_number: Optional[str] = None
    worktime: Optional[WorkTimeUpdateIn] = None

    def to_changes(self) -> BranchChanges:
        worktime = self.worktime or WorkTimeUpdateIn()
        return BranchChanges(
            name=self.name,
            address=self.address,
            location=self.location,
            phone_number=self.phone_number,
            opens=worktime.opens,
            closes=worktime.closes,
        )


class StaffIn(CamelModel):
    user_id: str


# ----------------------- Responses -----------------------

class SizeOut(CamelModel):
    id: str
    name: str
    stock: int


class VariantOut(CamelModel):
    id: str
    color: str
    color_hex: Optional[str] = None
    is_default: bool
    sizes: List[SizeOut]


class ProductOut(CamelModel):
    id: str
    name: str
    description: str
    base_price: float
    current_price: float
    discount_percentage: float
    discount_end_date: Optional[str] = None
    main_category: str
    categories: List[str]
    brand: Optional[str] = None
    stock: int
    sold: int
    average_rating: float
    variants: List[VariantOut]
    created_at: str


class OrderOut(CamelModel):
    id: str
    order_id: int
    customer: str
    products: List[str]
    status: str
    order_type: str
    total_price: float
    amount: int
    pickup_details: Optional[dict] = None
    delivery_details: Optional[dict] = None
    order_date: str


class UserOut(CamelModel):
    id: str
    phone_number: str
    first_name: str
    last_name: str
    role: str
    orders: List[str]
    avatar: Optional[str] = None


class BranchOut(CamelModel):
    id: str
    name: str
    address: str
    location: str
    phone_number: str
    worktime: dict
    staffs: List[str]
    orders: List[str]


def dump(model: type[CamelModel], dto: object) -> dict:
    """Serialize an application DTO through a response model."""
    return model.model_validate(dto).model_dump(by_alias=True)
