"""
Response envelope shared by every endpoint.

Service operations return an Outcome instead of raising for ordinary
control flow (validation failures, missing records, conflicts). Routes turn
the Outcome into the JSON envelope:

    {
        "result": <payload | null>,
        "warningResult": {"warnings": [Issue, ...]} | null,
        "errorResult": {"errors": [Issue, ...]} | null,
        "errorMessage": <string | null>
    }

with the Outcome's status code on the HTTP response.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from fastapi.responses import JSONResponse

# ──────────────────────────────────────────────────────────────
# Issue codes carried in warnings and structured errors
# ──────────────────────────────────────────────────────────────
COURSE_NOT_FOUND = 11745
STUDENT_RECORD_INVALID = 11746
COURSE_ALREADY_REGISTERED = 17405
STUDENT_ALREADY_EXISTS = 17406
STUDENT_NOT_REGISTERED_FOR_COURSE = 19042
LECTURER_COURSE_MISMATCH = 19941


@dataclass
class Issue:
    """One warning or error entry: {status, code, title, detail}."""
    status: int
    code: int
    title: str
    detail: str

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "code": self.code,
            "title": self.title,
            "detail": self.detail,
        }


@dataclass
class Outcome:
    """
    Result of a single service operation.

    warnings is None when the operation does not report warnings at all,
    and an (possibly empty) list when it does.
    """
    result: Any = None
    warnings: Optional[List[Issue]] = None
    errors: Optional[List[Issue]] = None
    error_message: Optional[str] = None
    status_code: int = 200

    @classmethod
    def ok(cls, result: Any = None, warnings: Optional[List[Issue]] = None,
           status_code: int = 200) -> "Outcome":
        return cls(result=result, warnings=warnings, status_code=status_code)

    @classmethod
    def fail(cls, status_code: int, message: str,
             errors: Optional[List[Issue]] = None,
             warnings: Optional[List[Issue]] = None) -> "Outcome":
        return cls(status_code=status_code, error_message=message,
                   errors=errors, warnings=warnings)

    @classmethod
    def bad_request(cls, message: str) -> "Outcome":
        return cls.fail(400, message)

    @classmethod
    def not_found(cls, message: str) -> "Outcome":
        return cls.fail(404, message)

    @property
    def succeeded(self) -> bool:
        return self.error_message is None

    def to_envelope(self) -> dict:
        return {
            "result": self.result,
            "warningResult": (
                {"warnings": [w.to_dict() for w in self.warnings]}
                if self.warnings is not None else None
            ),
            "errorResult": (
                {"errors": [e.to_dict() for e in self.errors]}
                if self.errors is not None else None
            ),
            "errorMessage": self.error_message,
        }


def render(outcome: Outcome) -> JSONResponse:
    """Render an Outcome as the JSON envelope with its HTTP status."""
    return JSONResponse(status_code=outcome.status_code, content=outcome.to_envelope())
