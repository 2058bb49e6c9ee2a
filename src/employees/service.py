"""
Service layer for the employee resource.

This module validates payloads with the rule engine, fills in external
content, and applies the result to the store. It knows nothing about
HTTP beyond the request verb used for requiredness, so routes stay thin.

Key responsibilities:
- validate create/replace payloads (first failing field only)
- attach a quote and a joke to new employees
- keep the CEO role unique across the store
- translate missing ids into NotFoundError
"""

from pathlib import Path
from threading import Lock
from typing import Any

from src.core.models import Employee, FieldRule, ValidationSchema
from src.core.rules import RuleConfigLoader, RuleEngine
from src.core.validators import ValidationError
from src.employees.checks import UniqueRoleCheck, employee_checks
from src.employees.errors import InvalidPayloadError, NotFoundError
from src.employees.external import ExternalContentClient
from src.employees.store import EmployeeStore
from src.observability.logger import get_logger, log_operation
from src.observability.metrics import record_request, record_validation_failure

logger = get_logger(__name__)

DEFAULT_RULES_PATH = Path(__file__).resolve().parents[2] / "config" / "employee_rules.yaml"

CREATE_VERB = "post"
REPLACE_VERB = "put"


def load_employee_schema(store: EmployeeStore, rules_path: str | Path | None = None) -> ValidationSchema:
    """Load the employee rules file with custom checks bound to ``store``."""
    loader = RuleConfigLoader(rules_path or DEFAULT_RULES_PATH, checks=employee_checks(store))
    return loader.load_schema()


class EmployeeService:
    """Business rules + validation + store mutation.

    Example usage:
        store = EmployeeStore()
        svc = EmployeeService(store, ExternalContentClient())
        employee_id = svc.create({"firstName": "Ann", ...})
    """

    def __init__(
        self,
        store: EmployeeStore,
        content_client: ExternalContentClient,
        schema: ValidationSchema | None = None,
        rules_path: str | Path | None = None,
    ):
        self.store = store
        self.content_client = content_client
        self.schema = schema or load_employee_schema(store, rules_path)
        self.engine = RuleEngine(self.schema)
        # Validation and the write that follows it run as one unit for
        # create and replace; delete cannot break a uniqueness rule
        self._write_lock = Lock()

    def list_employees(self) -> list[dict[str, Any]]:
        """Return every stored employee with its id, in insertion order."""
        employees = [employee.to_response(employee_id) for employee_id, employee in self.store.list_items()]
        record_request("list", "success")
        return employees

    def get_employee(self, employee_id: str) -> dict[str, Any]:
        """
        Return one employee with its id.

        Raises:
            NotFoundError: If the id is not stored
        """
        employee = self.store.get(employee_id)
        if employee is None:
            record_request("get", "not_found")
            raise NotFoundError(employee_id)
        record_request("get", "success")
        return employee.to_response(employee_id)

    def create(self, payload: Any) -> str:
        """
        Validate a payload and store it as a new employee.

        The quote and joke are fetched concurrently and the record is
        stored only after both resolve.

        Returns:
            The new employee id

        Raises:
            InvalidPayloadError: If the payload is not a JSON object
            ValidationError: On the first failing field rule
        """
        with self._write_lock:
            self._validate(payload, CREATE_VERB, self.engine, operation="create")
            employee = Employee.from_payload(payload)

            with log_operation("Fetching employee content", logger=logger, role=employee.role):
                quote, joke = self.content_client.fetch_all()

            employee = employee.model_copy(update={"quote": quote, "joke": joke})
            employee_id = self.store.insert(employee)

        logger.info("Employee created", extra={"employee_id": employee_id, "role": employee.role})
        record_request("create", "success")
        return employee_id

    def replace(self, employee_id: str, payload: Any) -> None:
        """
        Validate a payload and overwrite an existing employee.

        The id is checked before the payload. The employee being replaced
        does not count against itself for role uniqueness.

        Raises:
            NotFoundError: If the id is not stored
            InvalidPayloadError: If the payload is not a JSON object
            ValidationError: On the first failing field rule
        """
        with self._write_lock:
            if employee_id not in self.store:
                raise self._replace_target_missing(employee_id)

            engine = RuleEngine(self.schema.map_rules(lambda rule: self._exclude_from_checks(rule, employee_id)))
            self._validate(payload, REPLACE_VERB, engine, operation="replace")
            if not self.store.replace(employee_id, Employee.from_payload(payload)):
                # Deleted while the payload was being validated
                raise self._replace_target_missing(employee_id)

        logger.info("Employee replaced", extra={"employee_id": employee_id})
        record_request("replace", "success")

    def delete(self, employee_id: str) -> None:
        """
        Remove an employee. Deleting an unknown id is not an error.

        Only the store lock is taken, so a delete never waits behind a create
        that is still fetching external content.
        """
        removed = self.store.delete(employee_id)
        logger.info("Employee deleted", extra={"employee_id": employee_id, "removed": removed})
        record_request("delete", "success")

    def _validate(self, payload: Any, verb: str, engine: RuleEngine, operation: str) -> None:
        if not isinstance(payload, dict):
            record_request(operation, "invalid")
            raise InvalidPayloadError()
        try:
            engine.check_record(payload, verb)
        except ValidationError as e:
            logger.info(
                "Employee payload rejected",
                extra={"verb": verb, "field_name": e.field_name, "rule_type": e.rule_name},
            )
            record_validation_failure(e.field_name, e.rule_name)
            record_request(operation, "invalid")
            raise

    @staticmethod
    def _replace_target_missing(employee_id: str) -> NotFoundError:
        record_request("replace", "not_found")
        return NotFoundError(
            employee_id,
            f"A resource with id [{employee_id}] does not exist, and therefore cannot be updated.",
        )

    @staticmethod
    def _exclude_from_checks(rule: FieldRule, employee_id: str) -> FieldRule:
        if isinstance(rule.custom, UniqueRoleCheck):
            return rule.with_custom(rule.custom.excluding(employee_id))
        return rule
