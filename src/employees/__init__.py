"""
Employee resource: in-memory store, external content, and CRUD service.
"""

from .errors import EmployeeError, ExternalServiceDegraded, InvalidPayloadError, NotFoundError
from .external import ExternalContentClient
from .service import EmployeeService, load_employee_schema
from .store import EmployeeStore

__all__ = [
    "EmployeeStore",
    "EmployeeService",
    "ExternalContentClient",
    "load_employee_schema",
    "EmployeeError",
    "NotFoundError",
    "InvalidPayloadError",
    "ExternalServiceDegraded",
]
