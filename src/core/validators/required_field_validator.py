"""
RequiredFieldValidator - ensures a field key is present when the request verb requires it.
"""

from typing import Any, Dict
from .base_validator import BaseValidator, ValidationError


class RequiredFieldValidator(BaseValidator):
    """
    Validates that a required field is present in the record.

    Presence means the key exists: an explicit null value counts as present.

    Parameters:
    - required: bool, or a mapping of lowercase HTTP verb -> bool.
      Verbs missing from the mapping are required.
    """

    def __init__(self, field_name: str, parameters: Dict[str, Any] | None = None):
        super().__init__(field_name, parameters)
        self.required = self.parameters.get("required", True)

    def is_required(self, verb: str | None = None) -> bool:
        """Resolve requiredness for the given HTTP verb."""
        if isinstance(self.required, bool):
            return self.required
        if verb and verb.lower() in self.required:
            return bool(self.required[verb.lower()])
        return True

    def validate(self, value: Any, record: Dict[str, Any], verb: str | None = None) -> None:
        """
        Validate that the field is present if it is required for ``verb``.

        An absent optional field passes here; the caller skips its remaining steps.

        Raises:
            ValidationError: If the field is required and missing
        """
        if self.field_name not in record and self.is_required(verb):
            raise ValidationError(
                rule_name="required_field",
                field_name=self.field_name,
                message=f"Required property [{self.field_name}] is missing from the request payload."
            )

    @property
    def rule_type(self) -> str:
        return "required_field"
