"""
Lecture creation and lecture attendee listing.
"""

from sqlalchemy.orm import selectinload

from slat.logging_config import log_with_context
from slat.models import Attendee, Course, Lecture, Lecturer, LecturerCourse
from slat.responses import LECTURER_COURSE_MISMATCH, Issue, Outcome
from slat.schemas import CreateLectureRequest
from slat.serializers import attendee_payload, lecture_payload
from slat.services.base import Service, is_blank


def default_title(position: int, course: Course) -> str:
    return "Lecture {} | {} ({})".format(position, course.title, course.code)


def default_description(position: int, course: Course, lecturer: Lecturer) -> str:
    return "This is lecture number {} on {} taken by {} {}".format(
        position, course.title, lecturer.first_name, lecturer.last_name)


class LectureService(Service):
    channel = "attendance"

    def create_lecture(self, request: CreateLectureRequest) -> Outcome:
        """
        Create a lecture for a course the lecturer is assigned to.

        The lecture's position is the number of lectures the course already
        has plus one; it feeds the default title and description, which
        replace a missing (null) title or description only.
        """
        if is_blank(request.lecturer_id):
            return Outcome.bad_request("Lecturer id is required")
        if is_blank(request.course_id):
            return Outcome.bad_request("Course id is required")

        lecturer = self.db.get(Lecturer, request.lecturer_id)
        if lecturer is None:
            return Outcome.not_found(
                "The specified lecturer was not found. Please provide a valid lecturer id")
        course = self.db.get(Course, request.course_id)
        if course is None:
            return Outcome.not_found(
                "The specified course was not found. Please provide a valid course id")

        owns_course = self.db.query(LecturerCourse.id).filter(
            LecturerCourse.lecturer_id == lecturer.id,
            LecturerCourse.course_id == course.id
        ).first() is not None
        if not owns_course:
            message = "The specified lecturer does not own the specified course"
            return Outcome.fail(403, message, errors=[Issue(
                status=403,
                code=LECTURER_COURSE_MISMATCH,
                title="Lecturer and Course Mismatch",
                detail=message,
            )])

        position = self.db.query(Lecture).filter(Lecture.course_id == course.id).count() + 1
        lecture = Lecture(
            lecturer_id=lecturer.id,
            course_id=course.id,
            title=(request.title if request.title is not None
                   else default_title(position, course)),
            description=(request.description if request.description is not None
                         else default_description(position, course, lecturer)),
        )
        self.db.add(lecture)
        failure = self.commit("create lecture")
        if failure:
            return failure

        log_with_context(self.logger, "INFO", "Created lecture {} for {}".format(position, course.code),
                         context={"lecture_id": lecture.id, "course_id": course.id,
                                  "lecturer_id": lecturer.id})
        return Outcome.ok(lecture_payload(lecture))

    def list_attendees(self, lecture_id: str) -> Outcome:
        if is_blank(lecture_id):
            return Outcome.bad_request("The lecture id is required")
        if self.db.get(Lecture, lecture_id) is None:
            return Outcome.not_found(
                "The specified lecture id: {} does not match an existing lecture".format(lecture_id))

        attendees = self.db.query(Attendee).options(
            selectinload(Attendee.student)
        ).filter(Attendee.lecture_id == lecture_id).order_by(Attendee.date_created).all()
        return Outcome.ok([attendee_payload(a) for a in attendees])
