"""Data Transfer Objects: plain containers that cross layer boundaries.

Input specs carry what a caller asked for, still unvalidated. Output DTOs
carry what the CLI and HTTP layers show, without exposing domain objects
(and never a password hash).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from storefront.domain.model.branch import Branch
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.user import User

# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SizeSpec:
    name: str
    stock: int = 0
    id: str | None = None


@dataclass(frozen=True)
class VariantSpec:
    color: str
    sizes: list[SizeSpec] = field(default_factory=list)
    color_hex: str | None = None
    is_default: bool = False
    id: str | None = None


@dataclass(frozen=True)
class ProductSpec:
    """Input: a full product definition for the catalog."""

    name: str
    description: str
    base_price: str | float | Decimal
    main_category: str
    categories: list[str] = field(default_factory=list)
    brand: str | None = None
    discount_percentage: float = 0
    discount_end_date: datetime | None = None
    variants: list[VariantSpec] = field(default_factory=list)
    stock: int = 0


@dataclass(frozen=True)
class ProductChanges:
    """Input: a partial product update. None means "leave as is"."""

    name: str | None = None
    description: str | None = None
    base_price: str | float | Decimal | None = None
    main_category: str | None = None
    categories: list[str] | None = None
    brand: str | None = None
    discount_percentage: float | None = None
    discount_end_date: datetime | None = None
    variants: list[VariantSpec] | None = None
    stock: int | None = None
    clear_discount_end_date: bool = False


@dataclass(frozen=True)
class UserChanges:
    """Input: a partial user update. A new password arrives in plain text."""

    phone_number: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None
    password: str | None = None


@dataclass(frozen=True)
class BranchChanges:
    name: str | None = None
    address: str | None = None
    location: str | None = None
    phone_number: str | None = None
    opens: str | None = None
    closes: str | None = None


@dataclass(frozen=True)
class OrderLineSpec:
    """Input: one product of an order and how many units to take."""

    product_id: str | None
    quantity: int | None


@dataclass(frozen=True)
class PickupSpec:
    store_id: str | None = None


@dataclass(frozen=True)
class DeliverySpec:
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    phone_number: str | None = None


@dataclass(frozen=True)
class PlaceOrderRequest:
    """Input: an order exactly as submitted; the handler validates it."""

    customer: str | None
    products: list[OrderLineSpec] | None
    status: str | None
    order_id: int | None
    total_price: float | None
    amount: int | None
    order_type: str | None
    pickup_details: PickupSpec | None = None
    delivery_details: DeliverySpec | None = None


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SizeDTO:
    id: str
    name: str
    stock: int


@dataclass(frozen=True)
class VariantDTO:
    id: str
    color: str
    color_hex: str | None
    is_default: bool
    sizes: list[SizeDTO]


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    base_price: float
    current_price: float
    discount_percentage: float
    discount_end_date: str | None
    main_category: str
    categories: list[str]
    brand: str | None
    stock: int
    sold: int
    average_rating: float
    variants: list[VariantDTO]
    created_at: str


@dataclass(frozen=True)
class CatalogPageDTO:
    products: list[ProductDTO]
    total_products: int
    num_of_pages: int
    current_page: int
    brands: list[str]
    categories: list[str]
    min_price: float
    max_price: float


@dataclass(frozen=True)
class SearchPageDTO:
    products: list[ProductDTO]
    total_products: int
    num_of_pages: int
    current_page: int


@dataclass(frozen=True)
class OrderDTO:
    id: str
    order_id: int
    customer: str
    products: list[str]
    status: str
    order_type: str
    total_price: float
    amount: int
    pickup_details: dict | None
    delivery_details: dict | None
    order_date: str


@dataclass(frozen=True)
class OrderPageDTO:
    total: int
    orders: list[OrderDTO]


@dataclass(frozen=True)
class UserDTO:
    id: str
    phone_number: str
    first_name: str
    last_name: str
    role: str
    orders: list[str]
    avatar: str | None


@dataclass(frozen=True)
class BranchDTO:
    id: str
    name: str
    address: str
    location: str
    phone_number: str
    worktime: dict
    staffs: list[str]
    orders: list[str]


@dataclass(frozen=True)
class BranchPageDTO:
    total: int
    total_pages: int
    branches: list[BranchDTO]


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------


def product_to_dto(product: Product, now: datetime | None = None) -> ProductDTO:
    now = now or datetime.now(timezone.utc)
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        description=product.description,
        base_price=float(product.base_price),
        current_price=float(product.current_price(now)),
        discount_percentage=product.discount_percentage,
        discount_end_date=(
            product.discount_end_date.isoformat()
            if product.discount_end_date else None
        ),
        main_category=product.main_category,
        categories=list(product.categories),
        brand=product.brand,
        stock=product.stock,
        sold=product.sold,
        average_rating=product.average_rating,
        variants=[
            VariantDTO(
                id=variant.id,
                color=variant.color,
                color_hex=variant.color_hex,
                is_default=variant.is_default,
                sizes=[SizeDTO(id=s.id, name=s.name, stock=s.stock) for s in variant.sizes],
            )
            for variant in product.variants
        ],
        created_at=product.created_at.isoformat(),
    )


def order_to_dto(order: Order) -> OrderDTO:
    pickup = None
    if order.pickup_details is not None:
        pickup = {"storeId": order.pickup_details.store_id}
    delivery = None
    if order.delivery_details is not None:
        details = order.delivery_details
        delivery = {
            "address": details.address,
            "city": details.city,
            "phoneNumber": details.phone_number,
            "postalCode": details.postal_code,
        }
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_id=order.order_id,
        customer=order.customer_id,
        products=list(order.product_ids),
        status=order.status.value,
        order_type=order.order_type.value,
        total_price=order.total_price,
        amount=order.amount,
        pickup_details=pickup,
        delivery_details=delivery,
        order_date=order.order_date.isoformat(),
    )


def user_to_dto(user: User) -> UserDTO:
    return UserDTO(
        id=user.id,  # type: ignore[arg-type]
        phone_number=user.phone_number,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role.value,
        orders=list(user.order_ids),
        avatar=user.avatar,
    )


def branch_to_dto(branch: Branch) -> BranchDTO:
    return BranchDTO(
        id=branch.id,  # type: ignore[arg-type]
        name=branch.name,
        address=branch.address,
        location=branch.location,
        phone_number=branch.phone_number,
        worktime={"from": branch.worktime.opens, "to": branch.worktime.closes},
        staffs=list(branch.staff_ids),
        orders=list(branch.order_ids),
    )
