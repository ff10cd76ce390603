"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the MongoDB repositories
but keep everything in a dict. No database, no side effects.
"""

from __future__ import annotations

from datetime import datetime

from storefront.domain.exceptions import ConflictError
from storefront.domain.model.branch import Branch
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.user import Role, User
from storefront.domain.repository.branch_repository import BranchRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.user_repository import UserRepository
from storefront.domain.service.catalog_query import CatalogFacets, QueryPlan
from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.config import Settings


class _IdSequence:
    """Hands out 24-hex-digit IDs that look like ObjectIds."""

    def __init__(self, start: int = 1) -> None:
        self._next = start

    def __call__(self) -> str:
        value = f"{self._next:024x}"
        self._next += 1
        return value


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        self._ids = _IdSequence(start=0x100)
        self.saves = 0
        for p in products or []:
            self.save(p)
        self.saves = 0

    def next_id(self) -> str:
        return self._ids()

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def save(self, product: Product) -> None:
        product.recompute_stock()
        if product.id is None:
            product.id = self.next_id()
        self._store[product.id] = product
        self.saves += 1

    def delete(self, product_id: str) -> bool:
        return self._store.pop(product_id, None) is not None

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        product = self._store.get(product_id)
        if product is None or product.stock < quantity:
            return False
        product.stock -= quantity
        return True

    def increment_stock(self, product_id: str, quantity: int) -> None:
        product = self._store.get(product_id)
        if product is not None:
            product.stock += quantity

    def find(self, plan: QueryPlan) -> list[Product]:
        return plan.page_of(plan.sort_products(self._matching(plan)))

    def count(self, plan: QueryPlan) -> int:
        return len(self._matching(plan))

    def facets(self, plan: QueryPlan) -> CatalogFacets:
        return CatalogFacets.of(self._matching(plan))

    def find_on_sale(self, now: datetime, limit: int) -> list[Product]:
        on_sale = [p for p in self._store.values() if p.is_on_sale(now)]
        on_sale.sort(key=lambda p: p.discount_percentage, reverse=True)
        return on_sale[:limit]

    def find_related(self, product: Product, limit: int) -> list[Product]:
        related = [
            p for p in self._store.values()
            if p.id != product.id and p.main_category == product.main_category
        ]
        return related[:limit]

    def distinct_categories(self) -> list[str]:
        return sorted({c for p in self._store.values() for c in p.categories})

    def distinct_brands(self) -> list[str]:
        return sorted({p.brand for p in self._store.values() if p.brand})

    def _matching(self, plan: QueryPlan) -> list[Product]:
        return [p for p in self._store.values() if plan.matches(p)]


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[str, Order] = {}
        self._ids = _IdSequence(start=0x200)

    def get_by_id(self, order_id: str) -> Order | None:
        return self._store.get(order_id)

    def get_by_order_id(self, order_number: int) -> Order | None:
        return self._numbered(order_number)

    def list_page(self, skip: int, limit: int) -> list[Order]:
        return list(self._store.values())[skip:skip + limit]

    def count(self) -> int:
        return len(self._store)

    def save(self, order: Order) -> None:
        existing = self._numbered(order.order_id)
        if existing is not None and existing.id != order.id:
            raise ConflictError(f"Order #{order.order_id} already exists")
        if order.id is None:
            order.id = self._ids()
        self._store[order.id] = order

    def _numbered(self, order_number: int) -> Order | None:
        for order in self._store.values():
            if order.order_id == order_number:
                return order
        return None


class FakeUserRepository(UserRepository):

    def __init__(self, users: list[User] | None = None) -> None:
        self._store: dict[str, User] = {}
        self._ids = _IdSequence(start=0x300)
        for user in users or []:
            self.save(user)

    def get_by_id(self, user_id: str) -> User | None:
        return self._store.get(user_id)

    def get_by_phone(self, phone_number: str) -> User | None:
        for user in self._store.values():
            if user.phone_number == phone_number:
                return user
        return None

    def find_by_role(self, role: Role) -> list[User]:
        return [u for u in self._store.values() if u.role == role]

    def search_by_phone(self, fragment: str) -> list[User]:
        needle = fragment.lower()
        return [u for u in self._store.values() if needle in u.phone_number.lower()]

    def save(self, user: User) -> None:
        existing = self.get_by_phone(user.phone_number)
        if existing is not None and existing.id != user.id:
            raise ConflictError(
                f"Phone number {user.phone_number} is already registered"
            )
        if user.id is None:
            user.id = self._ids()
        stored = self._store.get(user.id)
        if stored is not None:
            # Links are owned by add_order, as in the Mongo repository.
            user.order_ids = list(stored.order_ids)
        self._store[user.id] = user

    def delete(self, user_id: str) -> bool:
        return self._store.pop(user_id, None) is not None

    def add_order(self, user_id: str, order_id: str) -> bool:
        user = self._store.get(user_id)
        if user is None:
            return False
        user.order_ids.append(order_id)
        return True


class FakeBranchRepository(BranchRepository):

    def __init__(self, branches: list[Branch] | None = None) -> None:
        self._store: dict[str, Branch] = {}
        self._ids = _IdSequence(start=0x400)
        for branch in branches or []:
            self.save(branch)

    def get_by_id(self, branch_id: str) -> Branch | None:
        return self._store.get(branch_id)

    def find_by_staff(self, user_id: str) -> Branch | None:
        for branch in self._store.values():
            if branch.has_staff(user_id):
                return branch
        return None

    def list_page(self, skip: int, limit: int) -> list[Branch]:
        return list(self._store.values())[skip:skip + limit]

    def count(self) -> int:
        return len(self._store)

    def save(self, branch: Branch) -> None:
        if branch.id is None:
            branch.id = self._ids()
        stored = self._store.get(branch.id)
        if stored is not None:
            branch.order_ids = list(stored.order_ids)
        self._store[branch.id] = branch

    def delete(self, branch_id: str) -> bool:
        return self._store.pop(branch_id, None) is not None

    def add_order(self, branch_id: str, order_id: str) -> bool:
        branch = self._store.get(branch_id)
        if branch is None:
            return False
        branch.order_ids.append(order_id)
        return True


def fake_hash(password: str) -> str:
    return f"hashed:{password}"


def make_container(
    products: list[Product] | None = None,
    users: list[User] | None = None,
    branches: list[Branch] | None = None,
    settings: Settings | None = None,
) -> Container:
    return Container(
        settings=settings or Settings(),
        products=FakeProductRepository(products),
        orders=FakeOrderRepository(),
        users=FakeUserRepository(users),
        branches=FakeBranchRepository(branches),
        hash_password=fake_hash,
    )
