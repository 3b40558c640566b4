"""
Course administration: creating courses, assigning lecturers to them and
reading them back with their lecturers.

The batch form is all-or-nothing: one invalid item rejects the whole batch
before anything is inserted.
"""

from typing import List, Optional

from sqlalchemy.orm import selectinload

from slat.logging_config import log_with_context
from slat.models import Course, Lecturer, LecturerCourse
from slat.responses import Outcome
from slat.schemas import AssignLecturerToCourseRequest, CreateCourseRequest
from slat.serializers import course_payload, course_with_lecturers_payload, iso
from slat.services.base import Service, is_blank


def validate_course(request: CreateCourseRequest) -> Optional[str]:
    """Return the error message for an invalid course, or None."""
    if is_blank(request.course_code):
        return "Course code cannot be null"
    if is_blank(request.course_title):
        return "Course title cannot be null"
    if request.course_unit is None or request.course_unit <= 0:
        return "Course unit cannot be less than or equal to zero"
    return None


class CourseService(Service):
    channel = "enrollment"

    def _new_course(self, request: CreateCourseRequest) -> Course:
        return Course(
            code=request.course_code.strip(),
            title=request.course_title.strip(),
            unit=request.course_unit,
            description=request.course_description,
        )

    def create_course(self, request: CreateCourseRequest) -> Outcome:
        error = validate_course(request)
        if error:
            return Outcome.bad_request(error)

        course = self._new_course(request)
        self.db.add(course)
        failure = self.commit("create course")
        if failure:
            return failure
        self.db.refresh(course)

        log_with_context(self.logger, "INFO", "Created course {}".format(course.code),
                         context={"course_id": course.id})
        return Outcome.ok(course_payload(course))

    def create_courses(self, requests: List[CreateCourseRequest]) -> Outcome:
        if not requests:
            return Outcome.bad_request("A minimum of one course is required.")
        for request in requests:
            error = validate_course(request)
            if error:
                return Outcome.bad_request(error)

        courses = [self._new_course(request) for request in requests]
        self.db.add_all(courses)
        failure = self.commit("create courses")
        if failure:
            return failure

        log_with_context(self.logger, "INFO", "Created {} courses".format(len(courses)))
        return Outcome.ok([course_payload(c) for c in courses])

    def get_course(self, course_id: str) -> Outcome:
        if is_blank(course_id):
            return Outcome.bad_request("Course id is required")
        course = self.db.query(Course).options(
            selectinload(Course.lecturers).selectinload(LecturerCourse.lecturer)
        ).filter(Course.id == course_id).first()
        if course is None:
            return Outcome.not_found("Course with id: {} was not found".format(course_id))
        return Outcome.ok(course_with_lecturers_payload(course))

    def list_courses(self) -> Outcome:
        courses = self.db.query(Course).options(
            selectinload(Course.lecturers).selectinload(LecturerCourse.lecturer)
        ).order_by(Course.date_created).all()
        return Outcome.ok([course_with_lecturers_payload(c) for c in courses])

    def assign_lecturer(self, request: AssignLecturerToCourseRequest) -> Outcome:
        """Pair a lecturer with a course. A repeated pair is a hard 400."""
        if is_blank(request.lecturer_id):
            return Outcome.bad_request("Lecturer id is required")
        if is_blank(request.course_id):
            return Outcome.bad_request("Course id is required")

        if self.db.get(Lecturer, request.lecturer_id) is None:
            return Outcome.not_found(
                "The specified lecturer was not found. Please provide a valid lecturer id")
        if self.db.get(Course, request.course_id) is None:
            return Outcome.not_found(
                "The specified course was not found. Please provide a valid course id")

        already_assigned = Outcome.bad_request(
            "The specified course was formerly assigned to the specified lecturer")
        exists = self.db.query(LecturerCourse).filter(
            LecturerCourse.lecturer_id == request.lecturer_id,
            LecturerCourse.course_id == request.course_id
        ).first()
        if exists:
            return already_assigned

        link = LecturerCourse(lecturer_id=request.lecturer_id, course_id=request.course_id)
        self.db.add(link)
        failure = self.commit("assign lecturer to course", conflict=already_assigned)
        if failure:
            return failure

        log_with_context(self.logger, "INFO", "Assigned lecturer to course",
                         context={"lecturer_id": link.lecturer_id, "course_id": link.course_id})
        return Outcome.ok({
            "id": link.id,
            "lecturerId": link.lecturer_id,
            "courseId": link.course_id,
            "dateCreated": iso(link.date_created),
        })
