"""
TypeValidator - validates that a field value has the expected JSON type.
"""

from typing import Any

from .base_validator import BaseValidator, ValidationError


class TypeValidator(BaseValidator):
    """
    Validates that a decoded JSON value matches a primitive type tag.

    Supported tags:
    - "string": str
    - "number": int or float (bool is not a number)
    - "boolean": bool
    - "object": dict, list or None (JSON null reports as an object)
    """

    TYPE_MAPPING = {
        "string": (str,),
        "number": (int, float),
        "boolean": (bool,),
        "object": (dict, list, type(None)),
    }

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        data_type = self.parameters.get("data_type")
        if not data_type:
            raise ValueError("TypeValidator requires 'data_type' parameter")

        self.data_type = data_type.lower()
        self.expected_types = self.TYPE_MAPPING.get(self.data_type)
        if not self.expected_types:
            raise ValueError(f"Unsupported data type: {data_type}")

    def matches(self, value: Any) -> bool:
        """Return True if ``value`` has this validator's type."""
        if isinstance(value, bool):
            return self.data_type == "boolean"
        return isinstance(value, self.expected_types)

    def validate(self, value: Any, record: dict[str, Any], verb: str | None = None) -> None:
        """
        Validate that the value matches the expected type. No coercion is attempted.

        Raises:
            ValidationError: If the runtime type differs
        """
        if not self.matches(value):
            raise ValidationError(
                rule_name="type_check",
                field_name=self.field_name,
                message=(
                    f"The value of property [{self.field_name}] is not the correct data type. "
                    f"It should be [{self.data_type}]."
                )
            )

    @property
    def rule_type(self) -> str:
        return "type_check"
