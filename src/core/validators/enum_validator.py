"""
EnumValidator - validates that a field value is one of an enumerated set.
"""

from typing import Any

from .base_validator import BaseValidator, ValidationError


def _same_value(left: Any, right: Any) -> bool:
    # Booleans never equal numbers, unlike Python's True == 1.
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    return left == right


class EnumValidator(BaseValidator):
    """
    Validates that a field value is one of ``allowed_values``.

    Parameters:
    - allowed_values: Ordered list of permitted literals
    - case_sensitive: When False, string entries and string values are
      lowercased before comparison (default True)

    The error message always lists the original values in their original order.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        allowed_values = self.parameters.get("allowed_values")
        if allowed_values is None:
            raise ValueError("EnumValidator requires 'allowed_values' parameter")

        self.allowed_values = list(allowed_values)
        self.case_sensitive = self.parameters.get("case_sensitive", True)

        if self.case_sensitive:
            self._candidates = self.allowed_values
        else:
            self._candidates = [
                v.lower() if isinstance(v, str) else v for v in self.allowed_values
            ]

    def validate(self, value: Any, record: dict[str, Any], verb: str | None = None) -> None:
        """
        Validate that the value is an allowed literal.

        Raises:
            ValidationError: If the value is not in the enumeration
        """
        candidate = value
        if not self.case_sensitive and isinstance(value, str):
            candidate = value.lower()

        if any(_same_value(candidate, allowed) for allowed in self._candidates):
            return

        listed = ", ".join(str(v) for v in self.allowed_values)
        raise ValidationError(
            rule_name="allowed_values",
            field_name=self.field_name,
            message=f"The value of property [{self.field_name}] is invalid. It should be one of {listed}."
        )

    @property
    def rule_type(self) -> str:
        return "allowed_values"
