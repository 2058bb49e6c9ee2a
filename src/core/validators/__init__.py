"""
Field rule step implementations.

Provides validators for required fields, type checking, enumerated values,
and custom predicates.
"""

from .base_validator import BaseValidator, ValidationError
from .custom_validator import CustomValidator
from .enum_validator import EnumValidator
from .required_field_validator import RequiredFieldValidator
from .type_validator import TypeValidator

__all__ = [
    "BaseValidator",
    "ValidationError",
    "RequiredFieldValidator",
    "TypeValidator",
    "EnumValidator",
    "CustomValidator",
]
