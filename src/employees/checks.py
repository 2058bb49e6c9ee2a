"""
Custom field checks for the employee schema.

Each check takes (field_name, value) and returns an error message, or
None when the value is acceptable. The rules file refers to them by the
names in ``employee_checks()``.
"""

import re
from datetime import date, datetime
from typing import Any, Callable, Dict

from src.employees.store import EmployeeStore

HIRE_DATE_FORMAT = "YYYY-MM-DD"
CEO_ROLE = "CEO"

# ASCII digits only; strptime alone accepts " 1" for %d and non-ASCII digits
HIRE_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def check_hire_date(field_name: str, value: Any, today: Callable[[], date] = date.today) -> str | None:
    """Require a strict YYYY-MM-DD date that is not in the future."""
    try:
        if not isinstance(value, str) or not HIRE_DATE_PATTERN.fullmatch(value):
            raise ValueError(value)
        parsed = datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return (
            f"The value [{value}] for property [{field_name}] is invalid. "
            f"The required format is [{HIRE_DATE_FORMAT}]."
        )
    if parsed > today():
        return f"The value [{value}] for property [{field_name}] is invalid, because it is in the future."
    return None


class UniqueRoleCheck:
    """
    Rejects a role that another stored employee already holds.

    Only ``role`` itself is unique; other values always pass. Comparison is
    case-insensitive. The store is read when the check runs, so it sees
    every record persisted before the current request.

    ``excluding(employee_id)`` returns a check that ignores one record,
    used when that record is being replaced.
    """

    def __init__(self, store: EmployeeStore, role: str = CEO_ROLE, exclude_id: str | None = None):
        self.store = store
        self.role = role
        self.exclude_id = exclude_id

    def excluding(self, employee_id: str) -> "UniqueRoleCheck":
        return UniqueRoleCheck(self.store, self.role, exclude_id=employee_id)

    def __call__(self, field_name: str, value: Any) -> str | None:
        if not isinstance(value, str) or value.lower() != self.role.lower():
            return None
        holders = [r for r in self.store.roles(exclude_id=self.exclude_id) if r.lower() == self.role.lower()]
        if holders:
            return (
                f"This employee cannot be created because there is already an employee "
                f"with the [{self.role}] role and there can only be one."
            )
        return None

    def __repr__(self) -> str:
        return f"UniqueRoleCheck(role={self.role!r}, exclude_id={self.exclude_id!r})"


def employee_checks(store: EmployeeStore) -> Dict[str, Callable[[str, Any], str | None]]:
    """Named custom checks available to the employee rules file."""
    return {
        "hire_date": check_hire_date,
        "unique_ceo": UniqueRoleCheck(store),
    }
