"""
Unit tests for Pydantic data models.
"""

import pytest
from pydantic import ValidationError

from src.core.models import Employee, FieldRule, ValidationSchema


class TestFieldRule:
    """Tests for FieldRule model"""

    def test_defaults(self):
        rule = FieldRule(field_name="name")
        assert rule.required is True
        assert rule.data_type is None
        assert rule.allowed_values is None
        assert rule.allowed_values_case_sensitive is True
        assert rule.custom is None

    def test_empty_field_name(self):
        with pytest.raises(ValidationError) as exc_info:
            FieldRule(field_name="")
        assert "field_name" in str(exc_info.value)

    def test_invalid_data_type(self):
        with pytest.raises(ValidationError):
            FieldRule(field_name="x", data_type="integer")

    def test_rule_is_immutable(self):
        rule = FieldRule(field_name="x")
        with pytest.raises(ValidationError):
            rule.required = False

    def test_with_custom_returns_copy(self):
        def check(name, value):
            return None

        rule = FieldRule(field_name="x", data_type="string")
        updated = rule.with_custom(check)

        assert updated.custom is check
        assert updated.data_type == "string"
        assert rule.custom is None


class TestValidationSchema:
    """Tests for ValidationSchema model"""

    def test_map_rules_preserves_order(self):
        schema = ValidationSchema(rules=[FieldRule(field_name="a"), FieldRule(field_name="b")])
        mapped = schema.map_rules(lambda rule: rule.model_copy(update={"required": False}))

        assert mapped.field_names == ["a", "b"]
        assert all(rule.required is False for rule in mapped.rules)
        assert all(rule.required is True for rule in schema.rules)

    def test_get_unknown_field(self):
        assert ValidationSchema().get("missing") is None


class TestEmployee:
    """Tests for Employee model"""

    def test_from_payload_normalizes(self):
        employee = Employee.from_payload({
            "firstName": "April",
            "lastName": "Ludgate",
            "hireDate": "2010-01-01",
            "role": "lackey",
            "quote": "",
            "favoriteColor": "black",
        })

        assert employee.role == "LACKEY"
        assert employee.quote is None
        assert "favoriteColor" not in employee.model_dump(by_alias=True)

    def test_to_response_uses_wire_names(self):
        employee = Employee.from_payload({
            "firstName": "Ron",
            "lastName": "Swanson",
            "hireDate": "2009-04-09",
            "role": "Manager",
            "joke": "A joke",
        })

        assert employee.to_response("abc") == {
            "firstName": "Ron",
            "lastName": "Swanson",
            "hireDate": "2009-04-09",
            "role": "MANAGER",
            "joke": "A joke",
            "_id": "abc",
        }
