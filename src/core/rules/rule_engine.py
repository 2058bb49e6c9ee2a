"""
Rule engine for validating records against a field validation schema.

Each FieldRule expands into an ordered chain of validators:

    required_field -> type_check -> allowed_values -> custom

The chain stops at the first failing step, and a record stops at the
first failing field. Callers therefore only ever see one error.
"""

from typing import Any

from src.core.models import FieldRule, ValidationSchema
from src.core.validators import (
    BaseValidator,
    CustomValidator,
    EnumValidator,
    RequiredFieldValidator,
    TypeValidator,
    ValidationError,
)


def build_validators(field_name: str, rule: FieldRule) -> list[BaseValidator]:
    """
    Build the validator chain for one field rule.

    The presence validator is always first; the other steps are added
    only when the rule configures them.
    """
    validators: list[BaseValidator] = [
        RequiredFieldValidator(field_name, {"required": rule.required})
    ]
    if rule.data_type:
        validators.append(TypeValidator(field_name, {"data_type": rule.data_type}))
    if rule.allowed_values is not None:
        validators.append(EnumValidator(field_name, {
            "allowed_values": rule.allowed_values,
            "case_sensitive": rule.allowed_values_case_sensitive,
        }))
    if rule.custom is not None:
        validators.append(CustomValidator(field_name, {"predicate": rule.custom}))
    return validators


def run_validators(
    record: dict[str, Any],
    validators: list[BaseValidator],
    verb: str | None = None,
) -> None:
    """
    Run a validator chain built by build_validators().

    Raises:
        ValidationError: On the first failing step
    """
    presence, *steps = validators
    presence.validate(record.get(presence.field_name), record, verb)

    # Absent optional fields skip every remaining step
    if presence.field_name not in record:
        return

    value = record[presence.field_name]
    for validator in steps:
        validator.validate(value, record, verb)


def validate_field(
    record: dict[str, Any],
    field_name: str,
    rule: FieldRule,
    verb: str | None = None,
) -> str | None:
    """
    Validate one field of ``record`` against ``rule``.

    Args:
        record: Decoded request payload
        field_name: Key to validate
        rule: Field rule configuration
        verb: HTTP method of the current request (for per-verb requiredness)

    Returns:
        The error message of the first failing step, or None if the field is valid
    """
    try:
        run_validators(record, build_validators(field_name, rule), verb)
    except ValidationError as e:
        return e.message
    return None


def validate_record(
    record: dict[str, Any],
    schema: ValidationSchema,
    verb: str | None = None,
) -> str | None:
    """
    Validate ``record`` against every rule of ``schema`` in order.

    Returns:
        The first error encountered, or None. Fields after the first
        failure are not checked.
    """
    for rule in schema.rules:
        error = validate_field(record, rule.field_name, rule, verb)
        if error:
            return error
    return None


class RuleEngine:
    """
    Validates records against a ValidationSchema.

    Validator chains are built once at construction and reused for
    every record.
    """

    def __init__(self, schema: ValidationSchema):
        """
        Initialize the rule engine.

        Args:
            schema: Ordered field rules
        """
        self.schema = schema
        self.validators: list[tuple[FieldRule, list[BaseValidator]]] = []
        self._build_validators()

    def _build_validators(self) -> None:
        """Build validator chains from the schema."""
        for rule in self.schema.rules:
            try:
                chain = build_validators(rule.field_name, rule)
            except ValueError as e:
                raise ValueError(f"Failed to create validators for field '{rule.field_name}': {e}")
            self.validators.append((rule, chain))

    def check_record(self, record: dict[str, Any], verb: str | None = None) -> None:
        """
        Validate a record, raising on the first failure.

        Args:
            record: Decoded request payload
            verb: HTTP method of the current request

        Raises:
            ValidationError: Carrying the failing field, rule type and message
        """
        for _, chain in self.validators:
            run_validators(record, chain, verb)

    def validate_record(self, record: dict[str, Any], verb: str | None = None) -> str | None:
        """Validate a record, returning the first error message or None."""
        try:
            self.check_record(record, verb)
        except ValidationError as e:
            return e.message
        return None

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of loaded rules.

        Returns:
            Dictionary with field order, rule counts and step types
        """
        return {
            "total_rules": len(self.validators),
            "fields": [rule.field_name for rule, _ in self.validators],
            "rules_by_type": self._count_by_type(),
            "conditionally_required": self._conditionally_required(),
        }

    def _count_by_type(self) -> dict[str, int]:
        """Count validator steps by rule type."""
        counts: dict[str, int] = {}
        for _, chain in self.validators:
            for validator in chain:
                counts[validator.rule_type] = counts.get(validator.rule_type, 0) + 1
        return counts

    def _conditionally_required(self) -> dict[str, Any]:
        """Fields whose requiredness is not unconditionally true."""
        return {
            rule.field_name: rule.required
            for rule, _ in self.validators
            if rule.required is not True
        }
