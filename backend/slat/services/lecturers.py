"""
Lecturer administration and lecturer-facing reads.

Batch creation is all-or-nothing: a missing field or an email that is
already taken (in the store or earlier in the same batch) rejects the whole
request and nothing is inserted.
"""

from typing import List, Optional

from sqlalchemy.orm import selectinload

from slat.logging_config import log_with_context
from slat.models import Attendee, Course, Lecture, Lecturer, LecturerCourse
from slat.responses import Outcome
from slat.schemas import CreateLecturerRequest
from slat.serializers import (
    course_payload, lecture_with_attendees_payload, lecturer_payload,
    lecturer_with_courses_payload,
)
from slat.services.base import Service, is_blank, normalize_email


def validate_lecturer(request: CreateLecturerRequest) -> Optional[str]:
    if is_blank(request.email):
        return "Email cannot be null"
    if is_blank(request.first_name):
        return "First name cannot be null"
    if is_blank(request.last_name):
        return "Last name cannot be null"
    return None


class LecturerService(Service):
    channel = "enrollment"

    def _email_taken(self, email: str) -> bool:
        return self.db.query(Lecturer.id).filter(Lecturer.email == email).first() is not None

    def _new_lecturer(self, request: CreateLecturerRequest) -> Lecturer:
        return Lecturer(
            email=normalize_email(request.email),
            first_name=request.first_name.strip(),
            last_name=request.last_name.strip(),
            photo=request.photo,
        )

    def _with_courses(self):
        return self.db.query(Lecturer).options(
            selectinload(Lecturer.courses).selectinload(LecturerCourse.course)
        )

    def create_lecturer(self, request: CreateLecturerRequest) -> Outcome:
        error = validate_lecturer(request)
        if error:
            return Outcome.bad_request(error)

        duplicate = Outcome.fail(403, "Email address already exist")
        if self._email_taken(normalize_email(request.email)):
            return duplicate

        lecturer = self._new_lecturer(request)
        self.db.add(lecturer)
        failure = self.commit("create lecturer", conflict=duplicate)
        if failure:
            return failure

        log_with_context(self.logger, "INFO", "Created lecturer",
                         context={"lecturer_id": lecturer.id})
        return Outcome.ok(lecturer_payload(lecturer))

    def create_lecturers(self, requests: List[CreateLecturerRequest]) -> Outcome:
        if not requests:
            return Outcome.bad_request("A minimum of one lecturer is required.")

        seen = set()
        for request in requests:
            error = validate_lecturer(request)
            if error:
                return Outcome.bad_request(error)
            email = normalize_email(request.email)
            if email in seen or self._email_taken(email):
                return Outcome.fail(403, "Email address {}, already exist".format(email))
            seen.add(email)

        lecturers = [self._new_lecturer(request) for request in requests]
        self.db.add_all(lecturers)
        failure = self.commit("create lecturers",
                              conflict=Outcome.fail(403, "Email address already exist"))
        if failure:
            return failure

        log_with_context(self.logger, "INFO", "Created {} lecturers".format(len(lecturers)))
        return Outcome.ok([lecturer_payload(lecturer) for lecturer in lecturers])

    def get_lecturer(self, lecturer_id: str) -> Outcome:
        if is_blank(lecturer_id):
            return Outcome.bad_request("Lecturer id is required")
        lecturer = self._with_courses().filter(Lecturer.id == lecturer_id).first()
        if lecturer is None:
            return Outcome.not_found("Lecturer with id: {} was not found".format(lecturer_id))
        return Outcome.ok(lecturer_with_courses_payload(lecturer))

    def get_lecturer_by_email(self, email: str) -> Outcome:
        if is_blank(email):
            return Outcome.bad_request("Lecturer's email is required")
        lecturer = self._with_courses().filter(Lecturer.email == normalize_email(email)).first()
        if lecturer is None:
            return Outcome.not_found("A lecturer with the specified email does not exist.")
        return Outcome.ok(lecturer_with_courses_payload(lecturer))

    def list_lecturers(self) -> Outcome:
        lecturers = self._with_courses().order_by(Lecturer.date_created).all()
        return Outcome.ok([lecturer_with_courses_payload(lecturer) for lecturer in lecturers])

    def attendance_records(self, lecturer_id: str) -> Outcome:
        """
        Every course the lecturer is assigned to, with each course's lectures
        (oldest first) and the students who attended them.
        """
        if is_blank(lecturer_id):
            return Outcome.bad_request("Lecturer id is required")
        if self.db.get(Lecturer, lecturer_id) is None:
            return Outcome.not_found("Lecturer with id: {} was not found".format(lecturer_id))

        links = self.db.query(LecturerCourse).options(
            selectinload(LecturerCourse.course)
            .selectinload(Course.lectures)
            .selectinload(Lecture.attendees)
            .selectinload(Attendee.student)
        ).filter(LecturerCourse.lecturer_id == lecturer_id).order_by(LecturerCourse.date_created).all()

        courses = []
        for link in links:
            payload = course_payload(link.course)
            lectures = sorted(link.course.lectures, key=lambda lec: lec.date_created)
            payload["lectures"] = [lecture_with_attendees_payload(lec) for lec in lectures]
            courses.append(payload)

        log_with_context(self.logger, "INFO",
            "Attendance records for lecturer {}: {} courses".format(lecturer_id, len(courses)),
            context={"lecturer_id": lecturer_id})
        return Outcome.ok({"courses": courses})
