"""
Attendance marking.

Marking goes through a fixed sequence of guards:

1. matric number and lecture id must be present
2. the student must exist
3. the lecture must exist
4. the student must be registered for the lecture's course
5. if the student is already marked for the lecture, succeed without
   writing anything
6. otherwise insert one attendees row

Step 5 makes marking idempotent: repeating a call never creates a second
row and never errors. A unique-constraint violation at commit means a
concurrent request marked the same pair first, which is also step 5.
"""

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import joinedload

from slat.logging_config import get_logger, log_with_context
from slat.models import Attendee, Lecture, StudentCourse
from slat.responses import STUDENT_NOT_REGISTERED_FOR_COURSE, Issue, Outcome
from slat.schemas import MarkAttendanceRequest
from slat.services.base import Service, is_blank
from slat.services.students import StudentService

db_logger = get_logger("db")

ALREADY_TAKEN = "Student attendance already taken"
MARKED = "Student attendance marked"
MARK_FAILED = "Failed to mark attendance due to an error"


class AttendanceService(Service):
    channel = "attendance"

    def mark_attendance(self, request: MarkAttendanceRequest) -> Outcome:
        if is_blank(request.matric_no):
            return Outcome.bad_request("The student's matric number is required")
        if is_blank(request.lecture_id):
            return Outcome.bad_request("Lecture's id is required")

        student = StudentService(self.db).find_by_matric(request.matric_no)
        if student is None:
            return Outcome.not_found(
                "Student with matric no: {} was not found".format(request.matric_no))

        lecture = self.db.query(Lecture).options(
            joinedload(Lecture.course)
        ).filter(Lecture.id == request.lecture_id).first()
        if lecture is None:
            return Outcome.not_found(
                "Lecture with id: {} was not found".format(request.lecture_id))

        context = {"student_id": student.id, "lecture_id": lecture.id}

        registered = self.db.query(StudentCourse.id).filter(
            StudentCourse.student_id == student.id,
            StudentCourse.course_id == lecture.course_id
        ).first() is not None
        if not registered:
            log_with_context(self.logger, "WARNING",
                "Rejected attendance for unregistered student", context=context)
            return Outcome.fail(403, "Student was not Register for Specified Course", errors=[Issue(
                status=403,
                code=STUDENT_NOT_REGISTERED_FOR_COURSE,
                title="Student was not Register for Specified Course",
                detail="The specified student, {} ({}) was not registered for {} ({})".format(
                    student.full_name, student.matric_no, lecture.course.title, lecture.course.code),
            )])

        already_marked = self.db.query(Attendee.id).filter(
            Attendee.student_id == student.id,
            Attendee.lecture_id == lecture.id
        ).first() is not None
        if already_marked:
            log_with_context(self.logger, "INFO", "Attendance already taken", context=context)
            return Outcome.ok(ALREADY_TAKEN)

        self.db.add(Attendee(student_id=student.id, lecture_id=lecture.id))
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            log_with_context(self.logger, "INFO",
                "Attendance was marked by a concurrent request", context=context)
            return Outcome.ok(ALREADY_TAKEN)
        except SQLAlchemyError as e:
            self.db.rollback()
            log_with_context(db_logger, "ERROR",
                "Failed to commit attendance: {}".format(str(e)), context=context, exc_info=True)
            return Outcome.fail(500, MARK_FAILED)

        log_with_context(self.logger, "INFO", "Attendance marked", context=context)
        return Outcome.ok(MARKED)
