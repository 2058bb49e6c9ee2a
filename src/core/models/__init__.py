"""
Core data models for the employee API.

All models use Pydantic for runtime validation and type safety.
"""

from .employee import Employee
from .field_rule import CustomCheck, FieldRule, ValidationSchema

__all__ = [
    "CustomCheck",
    "FieldRule",
    "ValidationSchema",
    "Employee",
]
