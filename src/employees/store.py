"""
In-memory employee store.

The store exclusively owns its records. Every read and write goes through
a single lock, so list operations never observe a half-applied update.
"""

import uuid
from threading import Lock
from typing import Callable

from src.core.models import Employee
from src.observability.logger import get_logger
from src.observability.metrics import employee_store_size

logger = get_logger(__name__)


def new_employee_id() -> str:
    """Generate a random UUID4 identifier."""
    return str(uuid.uuid4())


class EmployeeStore:
    """
    Keyed map of employee id -> Employee with create/read/update/delete.

    Example usage:
        store = EmployeeStore()
        employee_id = store.insert(employee)
        store.get(employee_id)
    """

    def __init__(self, id_factory: Callable[[], str] = new_employee_id):
        """
        Initialize an empty store.

        Args:
            id_factory: Generates candidate identifiers for new records
        """
        self._id_factory = id_factory
        self._records: dict[str, Employee] = {}
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, employee_id: object) -> bool:
        with self._lock:
            return employee_id in self._records

    def list_items(self) -> list[tuple[str, Employee]]:
        """Return (id, employee) pairs in insertion order."""
        with self._lock:
            return list(self._records.items())

    def get(self, employee_id: str) -> Employee | None:
        with self._lock:
            return self._records.get(employee_id)

    def insert(self, employee: Employee) -> str:
        """
        Store a new employee under a freshly generated id.

        Candidate ids that collide with an existing key are regenerated.

        Returns:
            The new identifier
        """
        with self._lock:
            employee_id = self._id_factory()
            while employee_id in self._records:
                logger.warning("Generated employee id collided, regenerating", extra={"employee_id": employee_id})
                employee_id = self._id_factory()
            self._records[employee_id] = employee
            employee_store_size.set(len(self._records))
        return employee_id

    def replace(self, employee_id: str, employee: Employee) -> bool:
        """
        Overwrite an existing employee in place.

        Returns:
            False if the id is not stored (nothing is written)
        """
        with self._lock:
            if employee_id not in self._records:
                return False
            self._records[employee_id] = employee
        return True

    def delete(self, employee_id: str) -> bool:
        """
        Remove an employee if present.

        Returns:
            True if a record was removed
        """
        with self._lock:
            removed = self._records.pop(employee_id, None) is not None
            employee_store_size.set(len(self._records))
        return removed

    def roles(self, exclude_id: str | None = None) -> list[str]:
        """Return the stored roles, optionally skipping one record."""
        with self._lock:
            return [
                employee.role
                for employee_id, employee in self._records.items()
                if employee_id != exclude_id
            ]

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
            employee_store_size.set(0)
