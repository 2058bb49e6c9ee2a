"""
Employee model representing a stored employee record.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field


class Employee(BaseModel):
    """
    An employee as held by the store.

    The model is built only from payloads that already passed the rule
    engine; it does not repeat those checks.

    Attributes:
        first_name: Given name ("firstName" on the wire)
        last_name: Family name ("lastName" on the wire)
        hire_date: ISO 8601 date string ("hireDate" on the wire)
        role: Uppercased role (CEO, VP, MANAGER, LACKEY)
        quote: Quote from the quote service (or its fallback)
        joke: Joke from the joke service (or its fallback)
    """

    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    hire_date: str = Field(..., alias="hireDate")
    role: str
    quote: str | None = None
    joke: str | None = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Employee":
        """
        Build a stored entry from a validated request payload.

        Unsupported keys are dropped, the role is uppercased, and
        quote/joke are kept only when non-empty.
        """
        entry = {
            "firstName": payload["firstName"],
            "lastName": payload["lastName"],
            "hireDate": payload["hireDate"],
            "role": payload["role"].upper(),
        }
        if payload.get("quote"):
            entry["quote"] = payload["quote"]
        if payload.get("joke"):
            entry["joke"] = payload["joke"]
        return cls(**entry)

    def to_response(self, employee_id: str) -> Dict[str, Any]:
        """Serialize with wire names plus the store identifier under ``_id``."""
        body = self.model_dump(by_alias=True, exclude_none=True)
        body["_id"] = employee_id
        return body

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "firstName": "Ron",
                "lastName": "Swanson",
                "hireDate": "2009-04-09",
                "role": "MANAGER",
                "quote": "Never half-ass two things. Whole-ass one thing.",
                "joke": "I'm reading a book about anti-gravity. It's impossible to put down.",
            }
        }
