"""Tests for user registration, branches and staff assignment."""

import pytest

from storefront.application.assign_staff import AssignStaffHandler, RemoveStaffHandler
from storefront.application.create_branch import CreateBranchHandler
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.register_user import RegisterUserHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import ConflictError, EntityNotFoundError, ValidationError
from storefront.domain.model.order import Order, OrderType, PickupDetails
from storefront.domain.model.user import Role
from tests.builders import make_branch, make_user
from tests.fakes import FakeBranchRepository, FakeOrderRepository, FakeUserRepository, fake_hash


class TestRegisterUser:

    def test_password_is_hashed_and_hidden(self):
        repo = FakeUserRepository()
        dto = RegisterUserHandler(repo, fake_hash).handle(
            "+998901112233", "Dilnoza", "Yusupova", "s3cret", role="staff",
        )

        assert dto.role == "staff"
        assert not hasattr(dto, "password_hash")
        assert repo.get_by_id(dto.id).password_hash == "hashed:s3cret"

    def test_duplicate_phone(self):
        repo = FakeUserRepository([make_user("+998901112233")])
        with pytest.raises(ConflictError, match="already exists"):
            RegisterUserHandler(repo, fake_hash).handle("+998901112233", "A", "B", "pw")

    def test_unknown_role(self):
        with pytest.raises(ValidationError, match="Unknown role"):
            RegisterUserHandler(FakeUserRepository(), fake_hash).handle(
                "+998901112233", "A", "B", "pw", role="owner",
            )

    def test_password_required(self):
        with pytest.raises(ValidationError, match="Password is required"):
            RegisterUserHandler(FakeUserRepository(), fake_hash).handle("+998", "A", "B", "")


class TestBranches:

    def _setup(self):
        staff = make_user("+998900000001", role=Role.STAFF)
        client = make_user("+998900000002", role=Role.CLIENT)
        north, south = make_branch("North"), make_branch("South")
        users = FakeUserRepository([staff, client])
        branches = FakeBranchRepository([north, south])
        return users, branches, staff, client, north, south

    def test_create_branch(self):
        dto = CreateBranchHandler(FakeBranchRepository()).handle(
            "Sergeli", "3 Yangi Sergeli", "Tashkent", "+998712223344", "10:00", "22:00",
        )
        assert dto.worktime == {"from": "10:00", "to": "22:00"}
        assert dto.staffs == []

    def test_assign_staff(self):
        users, branches, staff, _, north, _ = self._setup()
        dto = AssignStaffHandler(branches, users).handle(north.id, staff.id)
        assert dto.staffs == [staff.id]

    def test_assign_twice_to_same_branch(self):
        users, branches, staff, _, north, _ = self._setup()
        handler = AssignStaffHandler(branches, users)
        handler.handle(north.id, staff.id)
        with pytest.raises(ConflictError, match="already been added"):
            handler.handle(north.id, staff.id)

    def test_staff_cannot_work_two_branches(self):
        users, branches, staff, _, north, south = self._setup()
        handler = AssignStaffHandler(branches, users)
        handler.handle(north.id, staff.id)
        with pytest.raises(ConflictError, match="another branch"):
            handler.handle(south.id, staff.id)

    def test_client_cannot_be_staff(self):
        users, branches, _, client, north, _ = self._setup()
        with pytest.raises(ValidationError, match="Only staff"):
            AssignStaffHandler(branches, users).handle(north.id, client.id)

    def test_unknown_branch(self):
        users, branches, staff, _, _, _ = self._setup()
        with pytest.raises(EntityNotFoundError, match="Branch not found"):
            AssignStaffHandler(branches, users).handle("nope", staff.id)

    def test_remove_staff(self):
        users, branches, staff, _, north, _ = self._setup()
        AssignStaffHandler(branches, users).handle(north.id, staff.id)
        dto = RemoveStaffHandler(branches).handle(north.id, staff.id)
        assert dto.staffs == []

    def test_remove_absent_staff(self):
        _, branches, staff, _, north, _ = self._setup()
        with pytest.raises(EntityNotFoundError, match="Staff not found"):
            RemoveStaffHandler(branches).handle(north.id, staff.id)


class TestOrderQueries:

    def _setup(self, count=3):
        repo = FakeOrderRepository()
        for number in range(1, count + 1):
            repo.save(Order.create(
                order_id=number, customer_id="u1", product_ids=["p1"],
                total_price=10.0, amount=1, order_type=OrderType.PICKUP,
                details=PickupDetails(store_id="b1"),
            ))
        return repo

    def test_show_by_number(self):
        repo = self._setup()
        assert ShowOrderHandler(repo).handle_number(2).order_id == 2

    def test_show_missing(self):
        with pytest.raises(EntityNotFoundError, match="Order not found!"):
            ShowOrderHandler(self._setup()).handle("nope")

    def test_list_pages(self):
        repo = self._setup(count=5)
        page = ListOrdersHandler(repo).handle(page="2", page_size="2")
        assert page.total == 5
        assert [o.order_id for o in page.orders] == [3, 4]

    def test_status_update(self):
        repo = self._setup()
        order = repo.get_by_order_id(1)
        dto = UpdateOrderStatusHandler(repo).handle(order.id, "Shipped")
        assert dto.status == "Shipped"

    def test_unknown_status(self):
        repo = self._setup()
        order = repo.get_by_order_id(1)
        with pytest.raises(ValidationError, match="Unknown order status"):
            UpdateOrderStatusHandler(repo).handle(order.id, "Lost")
