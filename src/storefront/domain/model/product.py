"""Product aggregate.

A Product owns its color Variants, and each Variant owns its Sizes.
Sizes are the finest-grained unit that carries stock; the product-level
``stock`` is the sum over every size whenever variants exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity

HEX_COLOR = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")
MAX_NAME_LENGTH = 200


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass
class Size:
    id: str
    name: str
    stock: int = 0

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Size name is required")
        if self.stock < 0:
            raise ValidationError("Stock cannot be negative")


@dataclass
class Variant:
    id: str
    color: str
    color_hex: str | None = None
    sizes: list[Size] = field(default_factory=list)
    is_default: bool = False

    def __post_init__(self) -> None:
        if not self.color or not self.color.strip():
            raise ValidationError("Color is required")
        if self.color_hex and not HEX_COLOR.match(self.color_hex):
            raise ValidationError("Please provide a valid hex color")

    def find_size(self, size_id: str) -> Size | None:
        for size in self.sizes:
            if size.id == size_id:
                return size
        return None


@dataclass
class Product:
    """Aggregate root for the catalog.

    Use ``Product.create()`` for new products. ``__init__`` stays simple so
    repositories can reconstitute stored products without re-validating.
    """

    id: str | None
    name: str
    description: str
    base_price: Money
    main_category: str
    categories: list[str] = field(default_factory=list)
    brand: str | None = None
    discount_percentage: float = 0
    discount_end_date: datetime | None = None
    variants: list[Variant] = field(default_factory=list)
    stock: int = 0
    sold: int = 0
    average_rating: float = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        name: str,
        description: str,
        base_price: Money,
        main_category: str,
        categories: list[str] | None = None,
        brand: str | None = None,
        discount_percentage: float = 0,
        discount_end_date: datetime | None = None,
        variants: list[Variant] | None = None,
        stock: int = 0,
    ) -> Product:
        """Create a new product, enforcing catalog rules."""
        product = Product(
            id=None,
            name=(name or "").strip(),
            description=(description or "").strip(),
            base_price=base_price,
            main_category=(main_category or "").strip(),
            categories=list(categories or []),
            brand=brand.strip() if brand else None,
            discount_percentage=discount_percentage,
            discount_end_date=discount_end_date,
            variants=list(variants or []),
            stock=stock,
        )
        product.validate()
        product.recompute_stock()
        return product

    def validate(self) -> None:
        if not self.name:
            raise ValidationError("Product name is required")
        if len(self.name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Product name cannot exceed {MAX_NAME_LENGTH} characters"
            )
        if not self.description:
            raise ValidationError("Product description is required")
        if not self.main_category:
            raise ValidationError("Main category is required")
        if not 0 <= self.discount_percentage <= 100:
            raise ValidationError("Discount must be between 0 and 100")
        if self.stock < 0:
            raise ValidationError("Stock cannot be negative")
        for variant in self.variants:
            if not variant.sizes:
                raise ValidationError("At least one size is required")

    # --- Stock ----------------------------------------------------------------

    def recompute_stock(self) -> None:
        """Set aggregate stock to the sum of all size stock.

        Products without variants keep their own ``stock`` value.
        """
        if self.variants:
            self.stock = sum(
                size.stock for variant in self.variants for size in variant.sizes
            )

    def check_variant_stock(self, color_id: str, size_id: str) -> int:
        size = self._find_size(color_id, size_id)
        return size.stock if size is not None else 0

    def adjust_stock(self, color_id: str, size_id: str, quantity: int) -> bool:
        """Deduct ``quantity`` units from one size of one variant.

        Returns False without touching anything when either id does not
        resolve or the size holds fewer than ``quantity`` units. The caller
        persists the product; saving recomputes the aggregate stock.
        """
        qty = Quantity(quantity).value
        size = self._find_size(color_id, size_id)
        if size is None:
            return False
        if size.stock < qty:
            return False
        size.stock -= qty
        self.sold += qty
        return True

    # --- Pricing --------------------------------------------------------------

    def is_on_sale(self, now: datetime | None = None) -> bool:
        if not self.discount_percentage or self.discount_percentage <= 0:
            return False
        if self.discount_end_date is None:
            return True
        now = as_utc(now or datetime.now(timezone.utc))
        return as_utc(self.discount_end_date) > now

    def current_price(self, now: datetime | None = None) -> Money:
        if not self.is_on_sale(now):
            return self.base_price
        return self.base_price.discounted(self.discount_percentage)

    # --- Internal helpers -----------------------------------------------------

    def find_variant(self, color_id: str) -> Variant | None:
        for variant in self.variants:
            if variant.id == color_id:
                return variant
        return None

    def _find_size(self, color_id: str, size_id: str) -> Size | None:
        variant = self.find_variant(color_id)
        if variant is None:
            return None
        return variant.find_size(size_id)
