"""
HTTP routes for the employee resource.

Routes only translate between HTTP and EmployeeService; errors raised by
the service are mapped to responses by the handlers in src.api.app.
"""

from typing import Any

from fastapi import APIRouter, Request, Response
from starlette.concurrency import run_in_threadpool

from src.employees.service import EmployeeService
from src.observability.metrics import generate_metrics, get_content_type

router = APIRouter()


def get_service(request: Request) -> EmployeeService:
    return request.app.state.service


async def read_json(request: Request) -> Any:
    """Decode the request body; a missing or malformed body decodes to None."""
    try:
        return await request.json()
    except ValueError:
        return None


@router.get("/employees")
def list_employees(request: Request) -> list[dict[str, Any]]:
    return get_service(request).list_employees()


@router.get("/employees/{employee_id}")
def get_employee(employee_id: str, request: Request) -> dict[str, Any]:
    return get_service(request).get_employee(employee_id)


@router.post("/employees", status_code=201)
async def create_employee(request: Request) -> Response:
    """Create an employee; 201 with a Location header for the new resource."""
    payload = await read_json(request)
    employee_id = await run_in_threadpool(get_service(request).create, payload)
    location = str(request.url.replace(query="")).rstrip("/")
    return Response(status_code=201, headers={"Location": f"{location}/{employee_id}"})


@router.put("/employees/{employee_id}", status_code=204)
async def replace_employee(employee_id: str, request: Request) -> Response:
    payload = await read_json(request)
    await run_in_threadpool(get_service(request).replace, employee_id, payload)
    return Response(status_code=204)


@router.delete("/employees/{employee_id}", status_code=204)
def delete_employee(employee_id: str, request: Request) -> Response:
    get_service(request).delete(employee_id)
    return Response(status_code=204)


@router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    return Response(content=generate_metrics(), media_type=get_content_type())
