"""
Integration tests for the employee HTTP API.

Drives the FastAPI app through TestClient with stubbed external content.
"""

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.api.config import AppConfig
from src.core.rules import RuleEngine
from src.employees import EmployeeService

pytestmark = pytest.mark.integration

CEO_TAKEN = (
    "This employee cannot be created because there is already an employee "
    "with the [CEO] role and there can only be one."
)


def created_id(response) -> str:
    return response.headers["location"].rsplit("/", 1)[-1]


class TestCreateScenario:
    """The create sequence: lackey, first CEO, duplicate CEO, bad date, bad role"""

    def test_create_sequence(self, client):
        base = {"firstName": "A", "lastName": "B", "hireDate": "2020-03-01"}

        resp = client.post("/employees", json={**base, "role": "LACKEY"})
        assert resp.status_code == 201, resp.text

        resp = client.post("/employees", json={**base, "role": "CEO"})
        assert resp.status_code == 201, resp.text

        resp = client.post("/employees", json={**base, "role": "ceo"})
        assert resp.status_code == 400
        assert resp.json() == {"result": CEO_TAKEN}

        tomorrow = (date.today() + timedelta(days=1)).isoformat()
        resp = client.post("/employees", json={**base, "hireDate": tomorrow, "role": "VP"})
        assert resp.status_code == 400
        assert resp.json() == {
            "result": f"The value [{tomorrow}] for property [hireDate] is invalid, because it is in the future."
        }

        resp = client.post("/employees", json={**base, "role": "LACKEYX"})
        assert resp.status_code == 400
        assert resp.json() == {
            "result": "The value of property [role] is invalid. It should be one of CEO, VP, MANAGER, LACKEY."
        }

        assert len(client.get("/employees").json()) == 2


class TestEmployeeRoutes:
    """Status codes and bodies per route"""

    def test_round_trip(self, client, valid_payload):
        resp = client.post("/employees", json=valid_payload)

        assert resp.status_code == 201
        location = resp.headers["location"]
        assert location.startswith("http://testserver/employees/")

        employee_id = created_id(resp)
        fetched = client.get(f"/employees/{employee_id}")
        assert fetched.status_code == 200
        assert fetched.json() == {
            **valid_payload,
            "quote": "Stub quote",
            "joke": "Stub joke",
            "_id": employee_id,
        }

    def test_list_empty(self, client):
        resp = client.get("/employees")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_get_unknown(self, client):
        resp = client.get("/employees/does-not-exist")
        assert resp.status_code == 404
        assert resp.json() == {"result": "Resource with id [does-not-exist] not found."}

    def test_missing_field(self, client, valid_payload):
        payload = dict(valid_payload)
        del payload["lastName"]

        resp = client.post("/employees", json=payload)

        assert resp.status_code == 400
        assert resp.json() == {"result": "Required property [lastName] is missing from the request payload."}

    @pytest.mark.parametrize("hire_date", ["2020-01- 1", "２０２０-01-01"])
    def test_loose_hire_date_rejected(self, client, valid_payload, hire_date):
        resp = client.post("/employees", json={**valid_payload, "hireDate": hire_date})

        assert resp.status_code == 400
        assert resp.json() == {
            "result": f"The value [{hire_date}] for property [hireDate] is invalid. The required format is [YYYY-MM-DD]."
        }
        assert client.get("/employees").json() == []

    def test_wrong_type(self, client, valid_payload):
        resp = client.post("/employees", json={**valid_payload, "firstName": 12})
        assert resp.status_code == 400
        assert resp.json() == {
            "result": "The value of property [firstName] is not the correct data type. It should be [string]."
        }

    def test_body_not_an_object(self, client):
        resp = client.post("/employees", content=b"not json", headers={"content-type": "application/json"})
        assert resp.status_code == 400
        assert resp.json() == {"result": "The request payload must be a JSON object."}

    def test_replace(self, client, valid_payload, replace_payload):
        employee_id = created_id(client.post("/employees", json=valid_payload))

        resp = client.put(f"/employees/{employee_id}", json={**replace_payload, "role": "lackey"})

        assert resp.status_code == 204
        assert client.get(f"/employees/{employee_id}").json()["role"] == "LACKEY"

    def test_replace_requires_quote(self, client, valid_payload):
        employee_id = created_id(client.post("/employees", json=valid_payload))

        resp = client.put(f"/employees/{employee_id}", json=valid_payload)

        assert resp.status_code == 400
        assert resp.json() == {"result": "Required property [quote] is missing from the request payload."}

    def test_replace_unknown_before_validation(self, client):
        resp = client.put("/employees/ghost", json={})
        assert resp.status_code == 404
        assert resp.json() == {
            "result": "A resource with id [ghost] does not exist, and therefore cannot be updated."
        }

    def test_delete_is_idempotent(self, client, valid_payload):
        employee_id = created_id(client.post("/employees", json=valid_payload))

        assert client.delete(f"/employees/{employee_id}").status_code == 204
        assert client.delete(f"/employees/{employee_id}").status_code == 204
        assert client.get(f"/employees/{employee_id}").status_code == 404

    def test_unmatched_route(self, client):
        resp = client.get("/nothing/here")
        assert resp.status_code == 404
        assert resp.text == "Not found"

    def test_unsupported_method(self, client):
        resp = client.patch("/employees")
        assert resp.status_code == 404
        assert resp.text == "Not found"

    def test_request_id_echoed(self, client):
        resp = client.get("/employees", headers={"X-Request-ID": "req-42"})
        assert resp.headers["x-request-id"] == "req-42"

    def test_request_id_generated(self, client):
        assert client.get("/employees").headers["x-request-id"]

    def test_metrics_endpoint(self, client, valid_payload):
        client.post("/employees", json=valid_payload)

        resp = client.get("/metrics")

        assert resp.status_code == 200
        assert "employee_requests_total" in resp.text


class TestInternalErrors:
    """Unexpected defects surface as 500"""

    def test_custom_check_crash(self, store, content_client, valid_payload):
        service = EmployeeService(store, content_client)

        def broken(field_name, value):
            raise RuntimeError("corrupted store")

        service.engine = RuleEngine(service.schema.map_rules(
            lambda rule: rule.with_custom(broken) if rule.field_name == "lastName" else rule
        ))
        client = TestClient(create_app(config=AppConfig(), service=service), raise_server_exceptions=False)

        resp = client.post("/employees", json=valid_payload)

        assert resp.status_code == 500
        assert resp.json() == {"result": "Internal server error."}
