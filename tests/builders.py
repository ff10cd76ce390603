"""Helpers that build valid domain objects for tests."""

from __future__ import annotations

from datetime import datetime, timezone

from storefront.domain.model.branch import Branch, WorkTime
from storefront.domain.model.product import Product, Size, Variant
from storefront.domain.model.user import Role, User
from storefront.domain.model.value_objects import Money

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_product(
    name: str = "Linen Shirt",
    price: str = "100.00",
    stock: int = 10,
    variants: list[Variant] | None = None,
    **kwargs,
) -> Product:
    fields = dict(
        id=None,
        name=name,
        description=kwargs.pop("description", f"{name} for everyday wear"),
        base_price=Money.of(price),
        main_category=kwargs.pop("main_category", "Clothing"),
        variants=variants or [],
        stock=stock,
        created_at=kwargs.pop("created_at", NOW),
    )
    fields.update(kwargs)
    return Product(**fields)


def make_variant(color: str = "Blue", stocks: dict[str, int] | None = None, prefix: str = "v1") -> Variant:
    """Variant ``prefix`` with sizes ``{prefix}-{name}``."""
    stocks = stocks if stocks is not None else {"S": 3, "M": 5}
    return Variant(
        id=prefix,
        color=color,
        sizes=[Size(id=f"{prefix}-{name}", name=name, stock=qty) for name, qty in stocks.items()],
    )


def make_user(phone: str = "+998901234567", role: Role = Role.CLIENT) -> User:
    return User(
        id=None,
        phone_number=phone,
        first_name="Aziz",
        last_name="Karimov",
        password_hash="hashed:secret",
        role=role,
    )


def make_branch(name: str = "Chilonzor") -> Branch:
    return Branch(
        id=None,
        name=name,
        address="12 Bunyodkor Ave",
        location="Tashkent",
        phone_number="+998712000000",
        worktime=WorkTime(opens="09:00", closes="21:00"),
    )
