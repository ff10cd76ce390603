"""Tests for the PlaceOrderHandler use case."""

import logging

import pytest

from storefront.application.dto import DeliverySpec, OrderLineSpec, PickupSpec, PlaceOrderRequest
from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.exceptions import ConflictError, EntityNotFoundError, StockError, ValidationError
from tests.builders import make_branch, make_product, make_user
from tests.fakes import FakeBranchRepository, FakeOrderRepository, FakeProductRepository, FakeUserRepository


class TestPlaceOrder:

    def _setup(self, rollback=False):
        shirt = make_product("Shirt", stock=5)
        cap = make_product("Cap", stock=0)
        customer = make_user()
        branch = make_branch()
        products = FakeProductRepository([shirt, cap])
        orders = FakeOrderRepository()
        users = FakeUserRepository([customer])
        branches = FakeBranchRepository([branch])
        handler = PlaceOrderHandler(
            orders, products, users, branches,
            rollback_partial_reservations=rollback,
        )
        return handler, products, orders, users, branches, shirt, cap, customer, branch

    @staticmethod
    def _request(customer_id, lines, **overrides):
        fields = dict(
            customer=customer_id,
            products=[OrderLineSpec(product_id=pid, quantity=qty) for pid, qty in lines],
            status="Pending",
            order_id=1001,
            total_price=120.0,
            amount=sum(qty for _, qty in lines) or 1,
            order_type="Pickup",
            pickup_details=None,
            delivery_details=None,
        )
        fields.update(overrides)
        return PlaceOrderRequest(**fields)

    def test_pickup_order_reserves_stock_and_links(self):
        handler, products, orders, users, branches, shirt, _, customer, branch = self._setup()
        dto = handler.handle(self._request(
            customer.id, [(shirt.id, 2)], pickup_details=PickupSpec(store_id=branch.id),
        ))

        assert dto.order_id == 1001
        assert dto.status == "Pending"
        assert dto.pickup_details == {"storeId": branch.id}
        assert dto.delivery_details is None
        assert products.get_by_id(shirt.id).stock == 3
        assert orders.get_by_order_id(1001) is not None
        assert users.get_by_id(customer.id).order_ids == [dto.id]
        assert branches.get_by_id(branch.id).order_ids == [dto.id]

    def test_delivery_order(self):
        handler, products, _, users, branches, shirt, _, customer, branch = self._setup()
        dto = handler.handle(self._request(
            customer.id, [(shirt.id, 1)],
            order_type="Delivery",
            delivery_details=DeliverySpec(
                address="5 Navoi St", city="Tashkent",
                postal_code="100000", phone_number="+998900000000",
            ),
        ))

        assert dto.order_type == "Delivery"
        assert dto.pickup_details is None
        assert dto.delivery_details["postalCode"] == "100000"
        assert products.get_by_id(shirt.id).stock == 4
        assert users.get_by_id(customer.id).order_ids == [dto.id]
        assert branches.get_by_id(branch.id).order_ids == []

    def test_pickup_without_store_rejected_without_mutation(self):
        handler, products, orders, users, _, shirt, _, customer, _ = self._setup()
        with pytest.raises(ValidationError, match="Pickup store ID is required"):
            handler.handle(self._request(customer.id, [(shirt.id, 2)], pickup_details=PickupSpec()))

        assert products.get_by_id(shirt.id).stock == 5
        assert orders.count() == 0
        assert users.get_by_id(customer.id).order_ids == []

    def test_incomplete_delivery_rejected(self):
        handler, _, orders, _, _, shirt, _, customer, _ = self._setup()
        with pytest.raises(ValidationError, match="Complete delivery details"):
            handler.handle(self._request(
                customer.id, [(shirt.id, 1)],
                order_type="Delivery",
                delivery_details=DeliverySpec(address="5 Navoi St", city="Tashkent"),
            ))
        assert orders.count() == 0

    def test_second_line_short_keeps_first_reservation(self):
        handler, products, orders, _, _, shirt, cap, customer, branch = self._setup()
        with pytest.raises(StockError, match="Insufficient stock for product Cap!"):
            handler.handle(self._request(
                customer.id, [(shirt.id, 2), (cap.id, 1)],
                pickup_details=PickupSpec(store_id=branch.id),
            ))

        assert products.get_by_id(shirt.id).stock == 3
        assert orders.count() == 0

    def test_rollback_setting_restores_first_reservation(self):
        handler, products, orders, _, _, shirt, cap, customer, branch = self._setup(rollback=True)
        with pytest.raises(StockError):
            handler.handle(self._request(
                customer.id, [(shirt.id, 2), (cap.id, 1)],
                pickup_details=PickupSpec(store_id=branch.id),
            ))

        assert products.get_by_id(shirt.id).stock == 5
        assert orders.count() == 0

    def test_unknown_product(self):
        handler, _, orders, _, _, _, _, customer, branch = self._setup()
        with pytest.raises(EntityNotFoundError, match="not found!"):
            handler.handle(self._request(
                customer.id, [("ffffffffffffffffffffffff", 1)],
                pickup_details=PickupSpec(store_id=branch.id),
            ))
        assert orders.count() == 0

    def test_duplicate_order_number_takes_no_stock(self):
        handler, products, _, _, _, shirt, _, customer, branch = self._setup()
        request = self._request(
            customer.id, [(shirt.id, 1)], pickup_details=PickupSpec(store_id=branch.id),
        )
        handler.handle(request)

        with pytest.raises(ConflictError, match="already exists"):
            handler.handle(request)
        assert products.get_by_id(shirt.id).stock == 4

    def test_missing_branch_is_logged_not_fatal(self, caplog):
        handler, _, orders, users, _, shirt, _, customer, _ = self._setup()
        with caplog.at_level(logging.WARNING, logger="storefront.application.place_order"):
            dto = handler.handle(self._request(
                customer.id, [(shirt.id, 1)],
                pickup_details=PickupSpec(store_id="eeeeeeeeeeeeeeeeeeeeeeee"),
            ))

        assert orders.get_by_id(dto.id) is not None
        assert users.get_by_id(customer.id).order_ids == [dto.id]
        assert "branch eeeeeeeeeeeeeeeeeeeeeeee not found" in caplog.text

    def test_missing_customer_is_logged_not_fatal(self, caplog):
        handler, _, orders, _, _, shirt, _, _, branch = self._setup()
        with caplog.at_level(logging.WARNING, logger="storefront.application.place_order"):
            dto = handler.handle(self._request(
                "dddddddddddddddddddddddd", [(shirt.id, 1)],
                pickup_details=PickupSpec(store_id=branch.id),
            ))

        assert orders.get_by_id(dto.id) is not None
        assert "customer dddddddddddddddddddddddd not found" in caplog.text

    def test_order_number_taken_during_reservation_returns_stock(self):
        shirt = make_product("Shirt", stock=5)
        branch = make_branch()
        products = FakeProductRepository([shirt])
        orders = _StaleLookupOrderRepository()
        handler = PlaceOrderHandler(
            orders, products, FakeUserRepository(), FakeBranchRepository([branch]),
            rollback_partial_reservations=True,
        )
        request = self._request(
            "u1", [(shirt.id, 2)], pickup_details=PickupSpec(store_id=branch.id),
        )
        handler.handle(request)
        assert products.get_by_id(shirt.id).stock == 3

        with pytest.raises(ConflictError, match="already exists"):
            handler.handle(request)
        assert products.get_by_id(shirt.id).stock == 3
        assert orders.count() == 1

    def test_order_number_taken_during_reservation_without_rollback(self):
        shirt = make_product("Shirt", stock=5)
        products = FakeProductRepository([shirt])
        handler = PlaceOrderHandler(
            _StaleLookupOrderRepository(), products,
            FakeUserRepository(), FakeBranchRepository(),
        )
        request = self._request(
            "u1", [(shirt.id, 2)], pickup_details=PickupSpec(store_id="b1"),
        )
        handler.handle(request)

        with pytest.raises(ConflictError):
            handler.handle(request)
        assert products.get_by_id(shirt.id).stock == 1

    def test_back_links_accumulate_across_orders(self):
        handler, _, _, users, branches, shirt, _, customer, branch = self._setup()
        first = handler.handle(self._request(
            customer.id, [(shirt.id, 1)], pickup_details=PickupSpec(store_id=branch.id),
        ))
        second = handler.handle(self._request(
            customer.id, [(shirt.id, 1)], order_id=1002,
            pickup_details=PickupSpec(store_id=branch.id),
        ))

        assert users.get_by_id(customer.id).order_ids == [first.id, second.id]
        assert branches.get_by_id(branch.id).order_ids == [first.id, second.id]


class _StaleLookupOrderRepository(FakeOrderRepository):
    """Never sees an existing number up front, like a request that lost a race."""

    def get_by_order_id(self, order_number):
        return None


class TestPlaceOrderValidation:

    def _setup(self):
        shirt = make_product("Shirt", stock=5)
        products = FakeProductRepository([shirt])
        orders = FakeOrderRepository()
        handler = PlaceOrderHandler(
            orders, products, FakeUserRepository(), FakeBranchRepository(),
        )
        base = dict(
            customer="u1",
            products=[OrderLineSpec(product_id=shirt.id, quantity=1)],
            status="Pending",
            order_id=7,
            total_price=50.0,
            amount=1,
            order_type="Pickup",
            pickup_details=PickupSpec(store_id="b1"),
        )
        return handler, products, orders, shirt, base

    @pytest.mark.parametrize("missing", ["customer", "status", "order_id", "total_price", "amount", "order_type", "products"])
    def test_missing_field(self, missing):
        handler, _, orders, _, base = self._setup()
        base[missing] = None
        with pytest.raises(ValidationError, match="All fields are required!"):
            handler.handle(PlaceOrderRequest(**base))
        assert orders.count() == 0

    def test_empty_products(self):
        handler, _, _, _, base = self._setup()
        base["products"] = []
        with pytest.raises(ValidationError, match="Products must be a non-empty array!"):
            handler.handle(PlaceOrderRequest(**base))

    def test_negative_total(self):
        handler, products, _, shirt, base = self._setup()
        base["total_price"] = -5
        with pytest.raises(ValidationError, match="Total price must be a positive number!"):
            handler.handle(PlaceOrderRequest(**base))
        assert products.get_by_id(shirt.id).stock == 5

    def test_negative_amount(self):
        handler, _, _, _, base = self._setup()
        base["amount"] = -1
        with pytest.raises(ValidationError, match="amount must be a positive number!"):
            handler.handle(PlaceOrderRequest(**base))

    def test_unknown_order_type(self):
        handler, _, _, _, base = self._setup()
        base["order_type"] = "Drone"
        with pytest.raises(ValidationError, match="Unknown order type"):
            handler.handle(PlaceOrderRequest(**base))

    def test_zero_quantity_line(self):
        handler, products, _, shirt, base = self._setup()
        base["products"] = [OrderLineSpec(product_id=shirt.id, quantity=0)]
        with pytest.raises(ValidationError, match="Quantity must be positive"):
            handler.handle(PlaceOrderRequest(**base))
        assert products.get_by_id(shirt.id).stock == 5
