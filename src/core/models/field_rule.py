"""
FieldRule and ValidationSchema models: declarative per-field validation configuration.
"""

from typing import Any, Callable, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

CustomCheck = Callable[[str, Any], Optional[str]]


class FieldRule(BaseModel):
    """
    Declarative configuration describing how to validate one named field.

    Attributes:
        field_name: Key in the record this rule applies to
        required: Fixed bool, or mapping of HTTP verb -> bool (verbs absent from
                  the mapping are required)
        data_type: Expected JSON type tag ("string", "number", "boolean", "object")
        allowed_values: Ordered enumeration of permitted literals
        allowed_values_case_sensitive: Whether string enumeration matching is exact
        custom: Predicate (field_name, value) -> error message or None
    """

    field_name: str = Field(..., min_length=1)
    required: bool | Dict[str, bool] = True
    data_type: Literal["string", "number", "boolean", "object"] | None = None
    allowed_values: List[Any] | None = None
    allowed_values_case_sensitive: bool = True
    custom: CustomCheck | None = None

    @field_validator("required")
    @classmethod
    def normalize_verbs(cls, v):
        """Store per-verb keys in lower case so lookups match request methods."""
        if isinstance(v, dict):
            return {verb.lower(): flag for verb, flag in v.items()}
        return v

    def with_custom(self, custom: CustomCheck | None) -> "FieldRule":
        """Return a copy of this rule with a different custom predicate."""
        return self.model_copy(update={"custom": custom})

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "field_name": "role",
                "required": True,
                "data_type": "string",
                "allowed_values": ["CEO", "VP", "MANAGER", "LACKEY"],
                "allowed_values_case_sensitive": False,
            }
        }


class ValidationSchema(BaseModel):
    """
    Ordered sequence of FieldRules for one resource type.

    Order determines the order fields are checked, and therefore which
    error is reported first.
    """

    rules: tuple[FieldRule, ...] = ()

    @field_validator("rules")
    @classmethod
    def check_unique_fields(cls, v):
        """Each field may appear in a schema only once."""
        seen = set()
        for rule in v:
            if rule.field_name in seen:
                raise ValueError(f"Duplicate rule for field '{rule.field_name}'")
            seen.add(rule.field_name)
        return v

    @property
    def field_names(self) -> List[str]:
        return [rule.field_name for rule in self.rules]

    def get(self, field_name: str) -> FieldRule | None:
        for rule in self.rules:
            if rule.field_name == field_name:
                return rule
        return None

    def map_rules(self, func: Callable[[FieldRule], FieldRule]) -> "ValidationSchema":
        """Return a new schema with ``func`` applied to every rule, order preserved."""
        return ValidationSchema(rules=tuple(func(rule) for rule in self.rules))

    class Config:
        frozen = True
