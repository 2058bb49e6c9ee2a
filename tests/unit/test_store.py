"""
Unit tests for the in-memory employee store.
"""

import pytest

from src.core.models import Employee
from src.employees import EmployeeStore


def make_employee(role: str = "LACKEY", first_name: str = "Andy") -> Employee:
    return Employee(firstName=first_name, lastName="Dwyer", hireDate="2011-05-05", role=role)


@pytest.mark.unit
class TestEmployeeStore:
    """Tests for EmployeeStore"""

    def test_insert_and_get(self, store):
        employee = make_employee()
        employee_id = store.insert(employee)

        assert store.get(employee_id) == employee
        assert employee_id in store
        assert len(store) == 1

    def test_insert_regenerates_colliding_ids(self):
        candidates = iter(["a", "a", "a", "b"])
        store = EmployeeStore(id_factory=lambda: next(candidates))

        assert store.insert(make_employee()) == "a"
        assert store.insert(make_employee()) == "b"
        assert len(store) == 2

    def test_list_items_in_insertion_order(self, store):
        first = store.insert(make_employee(first_name="One"))
        second = store.insert(make_employee(first_name="Two"))

        assert [employee_id for employee_id, _ in store.list_items()] == [first, second]

    def test_replace_existing(self, store):
        employee_id = store.insert(make_employee())
        replacement = make_employee(role="VP")

        assert store.replace(employee_id, replacement) is True
        assert store.get(employee_id).role == "VP"

    def test_replace_missing_writes_nothing(self, store):
        assert store.replace("missing", make_employee()) is False
        assert len(store) == 0

    def test_delete_is_idempotent(self, store):
        employee_id = store.insert(make_employee())

        assert store.delete(employee_id) is True
        assert store.delete(employee_id) is False
        assert store.get(employee_id) is None

    def test_roles_excluding_one_record(self, store):
        ceo_id = store.insert(make_employee(role="CEO"))
        store.insert(make_employee(role="VP"))

        assert store.roles() == ["CEO", "VP"]
        assert store.roles(exclude_id=ceo_id) == ["VP"]

    def test_clear(self, store):
        store.insert(make_employee())
        store.clear()
        assert store.list_items() == []
