"""
Access-code authentication for lecturers and students.

Two calls per principal:

- request: look the principal up, store a fresh 6-digit code, commit, then
  email the code. The code is saved before delivery is attempted, so a
  delivery failure leaves a valid code behind; the caller is told delivery
  failed and has to request again to receive one.
- verify: compare the supplied code with the stored one.

Codes do not expire and are not consumed by a successful verify; a new
request simply overwrites the previous code.
"""

import secrets
from typing import Callable, Optional

from slat.logging_config import log_with_context
from slat.models import Lecturer, Student
from slat.responses import Outcome
from slat.serializers import lecturer_payload, student_payload
from slat.services.base import Service, is_blank, normalize_email, normalize_matric
from slat.services.mailer import MailDeliveryError

ACCESS_CODE_MIN = 100001
ACCESS_CODE_MAX = 999999

EMAIL_SUBJECT = "Verify Your Access"
DELIVERY_FAILED = "An error occurred while trying to send a validation email."
INVALID_CODE = "Invalid access code"
VALID_CODE = "Valid access code"


def generate_access_code() -> int:
    """Uniformly random code in [ACCESS_CODE_MIN, ACCESS_CODE_MAX]."""
    return ACCESS_CODE_MIN + secrets.randbelow(ACCESS_CODE_MAX - ACCESS_CODE_MIN + 1)


def access_email_body(first_name: str, code: int) -> str:
    return "<p>Hello {},</p> <p>Your access code is {}.</p>".format(first_name, code)


class AccessCodeService(Service):
    channel = "access"

    def __init__(self, db, mailer, code_generator: Callable[[], int] = generate_access_code):
        super().__init__(db)
        self.mailer = mailer
        self.code_generator = code_generator

    # ── lookup helpers ────────────────────────────────────────

    def _lecturer(self, email: str) -> Optional[Lecturer]:
        return self.db.query(Lecturer).filter(Lecturer.email == normalize_email(email)).first()

    def _student(self, matric_no: str) -> Optional[Student]:
        return self.db.query(Student).filter(Student.matric_no == normalize_matric(matric_no)).first()

    # ── shared flow ───────────────────────────────────────────

    def _issue(self, principal, kind: str) -> Optional[Outcome]:
        """Store and mail a new code. Returns a failure Outcome or None."""
        principal.access_code = self.code_generator()
        failure = self.commit("store {} access code".format(kind))
        if failure:
            return failure

        context = {"{}_id".format(kind): principal.id}
        try:
            self.mailer.send(principal.email, EMAIL_SUBJECT,
                             access_email_body(principal.first_name, principal.access_code))
        except MailDeliveryError as e:
            log_with_context(self.logger, "ERROR",
                "Access code stored but delivery failed: {}".format(str(e)), context=context)
            return Outcome.fail(500, DELIVERY_FAILED)

        log_with_context(self.logger, "INFO", "Access code issued", context=context)
        return None

    def _verify(self, principal, access_code: int, kind: str) -> Outcome:
        context = {"{}_id".format(kind): principal.id}
        if principal.access_code is None or principal.access_code != access_code:
            log_with_context(self.logger, "WARNING", "Access code mismatch", context=context)
            return Outcome.fail(401, INVALID_CODE)
        log_with_context(self.logger, "INFO", "Access code verified", context=context)
        return Outcome.ok(VALID_CODE)

    # ── lecturers ─────────────────────────────────────────────

    def request_lecturer_access(self, email: str) -> Outcome:
        if is_blank(email):
            return Outcome.bad_request("Lecturer's email is required")
        lecturer = self._lecturer(email)
        if lecturer is None:
            return Outcome.not_found("A lecturer with the specified email does not exist.")

        failure = self._issue(lecturer, "lecturer")
        if failure:
            return failure
        return Outcome.ok(lecturer_payload(lecturer))

    def verify_lecturer_access(self, email: str, access_code: Optional[int]) -> Outcome:
        if is_blank(email):
            return Outcome.bad_request("Lecturer's email is required")
        if access_code is None:
            return Outcome.bad_request("Access code is required")
        lecturer = self._lecturer(email)
        if lecturer is None:
            return Outcome.not_found("A lecturer with the specified email does not exist.")
        return self._verify(lecturer, access_code, "lecturer")

    # ── students ──────────────────────────────────────────────

    def request_student_access(self, matric_no: str) -> Outcome:
        if is_blank(matric_no):
            return Outcome.bad_request("Student's matric number is required")
        student = self._student(matric_no)
        if student is None:
            return Outcome.not_found("A student with the specified matric number does not exist.")

        failure = self._issue(student, "student")
        if failure:
            return failure
        return Outcome.ok(student_payload(student))

    def verify_student_access(self, matric_no: str, access_code: Optional[int]) -> Outcome:
        if is_blank(matric_no):
            return Outcome.bad_request("Student's matric number is required")
        if access_code is None:
            return Outcome.bad_request("Access code is required")
        student = self._student(matric_no)
        if student is None:
            return Outcome.not_found("A student with the specified matric number does not exist.")
        return self._verify(student, access_code, "student")
