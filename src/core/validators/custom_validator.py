"""
CustomValidator - validates using a custom Python predicate.
"""

from typing import Any

from .base_validator import BaseValidator, ValidationError


class CustomValidator(BaseValidator):
    """
    Validates using a custom predicate.

    Parameters:
    - predicate: A callable taking (field_name, value) that returns an error
                 message, or None/"" when the value is acceptable

    The predicate signature should be:
        def my_check(field_name: str, value: Any) -> str | None:
            if not valid:
                return f"The value of [{field_name}] is unacceptable."

    Exceptions raised by the predicate are not converted; they propagate
    to the caller as defects.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        self.predicate = self.parameters.get("predicate")
        if not self.predicate:
            raise ValueError("CustomValidator requires 'predicate' parameter")

        if not callable(self.predicate):
            raise ValueError("predicate must be callable")

    def validate(self, value: Any, record: dict[str, Any], verb: str | None = None) -> None:
        """
        Validate using the custom predicate.

        Raises:
            ValidationError: If the predicate returns a non-empty message
        """
        message = self.predicate(self.field_name, value)
        if message:
            raise ValidationError(
                rule_name="custom",
                field_name=self.field_name,
                message=message
            )

    @property
    def rule_type(self) -> str:
        return "custom"
