"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from pymongo import MongoClient

from storefront.domain.repository.branch_repository import BranchRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.user_repository import UserRepository
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.mongo_branch_repository import (
    MongoBranchRepository,
)
from storefront.infrastructure.persistence.mongo_order_repository import (
    MongoOrderRepository,
)
from storefront.infrastructure.persistence.mongo_product_repository import (
    MongoProductRepository,
)
from storefront.infrastructure.persistence.mongo_user_repository import (
    MongoUserRepository,
)
from storefront.infrastructure.security import hash_password

logger = logging.getLogger(__name__)


@dataclass
class Container:
    settings: Settings
    products: ProductRepository
    orders: OrderRepository
    users: UserRepository
    branches: BranchRepository
    hash_password: Callable[[str], str] = hash_password


def build_container(settings: Settings | None = None) -> Container:
    settings = settings or Settings.from_env()
    client: MongoClient = MongoClient(settings.mongodb_uri, tz_aware=True)
    db = client[settings.mongodb_db]
    logger.info("Using MongoDB database '%s'", settings.mongodb_db)

    products = MongoProductRepository(db["products"])
    orders = MongoOrderRepository(db["orders"])
    users = MongoUserRepository(db["users"])
    branches = MongoBranchRepository(db["branches"])

    products.ensure_indexes()
    orders.ensure_indexes()
    users.ensure_indexes()

    return Container(
        settings=settings,
        products=products,
        orders=orders,
        users=users,
        branches=branches,
    )
