"""
Unit tests for employee custom checks.
"""

from datetime import date, timedelta

import pytest

from src.core.models import Employee
from src.employees.checks import UniqueRoleCheck, check_hire_date

CEO_TAKEN = (
    "This employee cannot be created because there is already an employee "
    "with the [CEO] role and there can only be one."
)


def fixed_today():
    return date(2024, 6, 15)


class TestCheckHireDate:
    """Tests for check_hire_date"""

    def test_past_date_passes(self):
        assert check_hire_date("hireDate", "2020-03-01") is None

    def test_today_passes(self):
        assert check_hire_date("hireDate", "2024-06-15", today=fixed_today) is None

    def test_future_date(self):
        assert check_hire_date("hireDate", "2024-06-16", today=fixed_today) == (
            "The value [2024-06-16] for property [hireDate] is invalid, because it is in the future."
        )

    def test_future_relative_to_real_today(self):
        tomorrow = (date.today() + timedelta(days=1)).isoformat()
        assert "in the future" in check_hire_date("hireDate", tomorrow)

    @pytest.mark.parametrize(
        "value",
        [
            "2020-3-01",
            "03/01/2020",
            "2020-02-30",
            "2020-03-01T00:00",
            "",
            "2020-01- 1",
            "２０２０-01-01",
            "2020-01-01\n",
            20200101,
        ],
    )
    def test_malformed_dates(self, value):
        assert check_hire_date("hireDate", value) == (
            f"The value [{value}] for property [hireDate] is invalid. The required format is [YYYY-MM-DD]."
        )


class TestUniqueRoleCheck:
    """Tests for UniqueRoleCheck"""

    def add(self, store, role):
        return store.insert(Employee(firstName="A", lastName="B", hireDate="2020-01-01", role=role))

    def test_first_ceo_passes(self, store):
        assert UniqueRoleCheck(store)("role", "ceo") is None

    def test_second_ceo_rejected_case_insensitive(self, store):
        self.add(store, "CEO")
        assert UniqueRoleCheck(store)("role", "cEo") == CEO_TAKEN

    def test_other_roles_pass(self, store):
        self.add(store, "CEO")
        assert UniqueRoleCheck(store)("role", "VP") is None

    def test_excluding_current_holder(self, store):
        ceo_id = self.add(store, "CEO")
        check = UniqueRoleCheck(store)

        assert check.excluding(ceo_id)("role", "CEO") is None
        assert check.exclude_id is None

    @pytest.mark.parametrize("value", [None, 5, ["CEO"]])
    def test_non_string_role_passes_through(self, store, value):
        self.add(store, "CEO")
        assert UniqueRoleCheck(store)("role", value) is None

    def test_excluding_other_record_still_rejects(self, store):
        self.add(store, "CEO")
        vp_id = self.add(store, "VP")

        assert UniqueRoleCheck(store).excluding(vp_id)("role", "CEO") == CEO_TAKEN
