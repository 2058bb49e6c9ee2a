"""
Rule configuration management.

Loads field validation schemas from YAML files and provides a builder
for constructing them in code.
"""

from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError as ModelValidationError

from src.core.models import CustomCheck, FieldRule, ValidationSchema

RULE_KEYS = {
    "field_name",
    "required",
    "data_type",
    "allowed_values",
    "allowed_values_case_sensitive",
    "custom",
}


class RuleConfigLoader:
    """
    Loads a field validation schema from a YAML configuration file.

    Custom predicates cannot be written in YAML, so rules refer to them by
    name and the loader resolves each name against the ``checks`` mapping.

    Expected YAML format:
    ```yaml
    fields:
      - field_name: hireDate
        data_type: string
        custom: hire_date

      - field_name: role
        data_type: string
        allowed_values: [CEO, VP, MANAGER, LACKEY]
        allowed_values_case_sensitive: false
        custom: unique_ceo

      - field_name: quote
        data_type: string
        required:
          post: false
          put: true
    ```
    """

    def __init__(self, config_path: str | Path, checks: Mapping[str, CustomCheck] | None = None):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
            checks: Named custom predicates referenced by ``custom`` entries
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")
        self.checks = dict(checks or {})

    def load_schema(self) -> ValidationSchema:
        """
        Load and parse the schema from the YAML file.

        Returns:
            ValidationSchema with rules in file order

        Raises:
            ValueError: If YAML is invalid, a rule is malformed or a custom
                        check name is unknown
        """
        with open(self.config_path) as f:
            config = yaml.safe_load(f)

        if not config or "fields" not in config:
            raise ValueError("Configuration file must contain 'fields' section")

        field_defs = config["fields"]
        if not isinstance(field_defs, list):
            raise ValueError("'fields' must be a list of field rules")

        rules = [self._parse_rule(rule_def, idx) for idx, rule_def in enumerate(field_defs)]

        try:
            return ValidationSchema(rules=rules)
        except ModelValidationError as e:
            raise ValueError(f"Invalid schema in {self.config_path}: {e}")

    def _parse_rule(self, rule_def: Any, idx: int) -> FieldRule:
        """
        Parse a single field rule definition.

        Args:
            rule_def: The rule definition from YAML
            idx: Position of the rule (for error messages)

        Returns:
            Parsed FieldRule

        Raises:
            ValueError: If rule definition is invalid
        """
        if not isinstance(rule_def, dict):
            raise ValueError(f"Field rule #{idx} must be a mapping")
        if "field_name" not in rule_def:
            raise ValueError(f"Field rule #{idx} is missing 'field_name'")

        field_name = rule_def["field_name"]

        unknown = set(rule_def) - RULE_KEYS
        if unknown:
            raise ValueError(f"Unknown keys for field '{field_name}': {', '.join(sorted(unknown))}")

        options = dict(rule_def)
        check_name = options.pop("custom", None)
        if check_name is not None:
            if check_name not in self.checks:
                raise ValueError(f"Unknown custom check '{check_name}' for field '{field_name}'")
            options["custom"] = self.checks[check_name]

        try:
            return FieldRule(**options)
        except ModelValidationError as e:
            raise ValueError(f"Invalid rule for field '{field_name}': {e}")


class RuleConfigBuilder:
    """
    Programmatically build field validation schemas (for testing or dynamic rules).
    """

    def __init__(self):
        """Initialize empty rule configuration."""
        self.rules: list[FieldRule] = []

    def add_field(
        self,
        field_name: str,
        data_type: str | None = None,
        required: bool | dict[str, bool] = True,
        allowed_values: list[Any] | None = None,
        case_sensitive: bool = True,
        custom: CustomCheck | None = None,
    ) -> "RuleConfigBuilder":
        """Add a rule for one field."""
        self.rules.append(FieldRule(
            field_name=field_name,
            data_type=data_type,
            required=required,
            allowed_values=allowed_values,
            allowed_values_case_sensitive=case_sensitive,
            custom=custom,
        ))
        return self

    def add_string(self, field_name: str, **options: Any) -> "RuleConfigBuilder":
        """Add a string-typed field rule."""
        return self.add_field(field_name, data_type="string", **options)

    def add_enum(
        self,
        field_name: str,
        allowed_values: list[Any],
        case_sensitive: bool = True,
        **options: Any
    ) -> "RuleConfigBuilder":
        """Add an enumerated field rule."""
        return self.add_field(
            field_name,
            allowed_values=allowed_values,
            case_sensitive=case_sensitive,
            **options
        )

    def build(self) -> ValidationSchema:
        """Build and return the schema."""
        return ValidationSchema(rules=tuple(self.rules))
