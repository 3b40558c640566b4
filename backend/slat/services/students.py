"""
Student administration: creation, course registration, photos and reads.

Unlike the course and lecturer batches, the student batch and the course
registration endpoints are lenient: bad or duplicate items are skipped and
reported as warnings while the remaining items are saved.
"""

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import selectinload

from slat.logging_config import log_with_context
from slat.models import Course, Student, StudentCourse
from slat.responses import (
    COURSE_ALREADY_REGISTERED, COURSE_NOT_FOUND, STUDENT_ALREADY_EXISTS,
    STUDENT_RECORD_INVALID, Issue, Outcome,
)
from slat.schemas import (
    CreateStudentRequest, RegisterStudentCoursesRequest, UpdateStudentPhotoRequest,
)
from slat.serializers import course_payload, student_payload
from slat.services.base import Service, is_blank, normalize_email, normalize_matric


def validate_student(request: CreateStudentRequest) -> Optional[str]:
    if is_blank(request.email):
        return "Email cannot be null"
    if is_blank(request.matric_no):
        return "Matric number cannot be null"
    if is_blank(request.first_name):
        return "First name cannot be null"
    if is_blank(request.last_name):
        return "Last name cannot be null"
    return None


class StudentService(Service):
    channel = "enrollment"

    def _exists(self, email: str, matric_no: str) -> bool:
        return self.db.query(Student.id).filter(
            or_(Student.email == email, Student.matric_no == matric_no)
        ).first() is not None

    def _new_student(self, request: CreateStudentRequest) -> Student:
        return Student(
            email=normalize_email(request.email),
            matric_no=normalize_matric(request.matric_no),
            first_name=request.first_name.strip(),
            last_name=request.last_name.strip(),
            photo=request.photo,
        )

    def find_by_matric(self, matric_no: str) -> Optional[Student]:
        return self.db.query(Student).filter(
            Student.matric_no == normalize_matric(matric_no)
        ).first()

    def create_student(self, request: CreateStudentRequest) -> Outcome:
        error = validate_student(request)
        if error:
            return Outcome.bad_request(error)

        duplicate = Outcome.fail(403, "A student with the specified email or matric number already exist")
        if self._exists(normalize_email(request.email), normalize_matric(request.matric_no)):
            return duplicate

        student = self._new_student(request)
        self.db.add(student)
        failure = self.commit("create student", conflict=duplicate)
        if failure:
            return failure

        log_with_context(self.logger, "INFO", "Created student {}".format(student.matric_no),
                         context={"student_id": student.id})
        return Outcome.ok(student_payload(student))

    def create_students(self, requests: List[CreateStudentRequest]) -> Outcome:
        """
        Insert every valid, non-duplicate student in one save.

        Items with a missing field, or whose email or matric number is
        already stored or used by an earlier item of the batch, become
        warnings.
        """
        if not requests:
            return Outcome.bad_request("A minimum of one student is required.")

        warnings = []
        students = []
        seen_emails = set()
        seen_matrics = set()

        for position, request in enumerate(requests, 1):
            error = validate_student(request)
            if error:
                warnings.append(Issue(
                    status=400,
                    code=STUDENT_RECORD_INVALID,
                    title="Invalid Student Record",
                    detail="Student at position {} was skipped: {}".format(position, error),
                ))
                continue

            email = normalize_email(request.email)
            matric_no = normalize_matric(request.matric_no)
            if email in seen_emails or matric_no in seen_matrics or self._exists(email, matric_no):
                warnings.append(Issue(
                    status=403,
                    code=STUDENT_ALREADY_EXISTS,
                    title="Student Already Exists",
                    detail="A student with email: {} or matric number: {} already exist".format(
                        email, matric_no),
                ))
                continue

            seen_emails.add(email)
            seen_matrics.add(matric_no)
            students.append(self._new_student(request))

        self.db.add_all(students)
        failure = self.commit("create students")
        if failure:
            failure.warnings = warnings
            return failure

        log_with_context(self.logger, "INFO",
            "Created {} students, skipped {}".format(len(students), len(warnings)),
            extra_data={"received": len(requests)})
        return Outcome.ok([student_payload(s) for s in students], warnings=warnings)

    def get_student(self, matric_no: str) -> Outcome:
        if is_blank(matric_no):
            return Outcome.bad_request("Student's matric number is required!")
        student = self.find_by_matric(matric_no)
        if student is None:
            return Outcome.not_found(
                "The matric number: {} does not match an existing student".format(matric_no))
        return Outcome.ok(student_payload(student))

    def list_students(self) -> Outcome:
        students = self.db.query(Student).order_by(Student.date_created).all()
        return Outcome.ok([student_payload(s) for s in students])

    def update_photo(self, request: UpdateStudentPhotoRequest) -> Outcome:
        if is_blank(request.encoded_photo):
            return Outcome.bad_request(
                "This operation require a student's photo base 64 encoded format.")
        if is_blank(request.id):
            return Outcome.bad_request("Student id is required")

        student = self.db.get(Student, request.id)
        if student is None:
            return Outcome.not_found("The specified id does not match a student")

        student.photo = request.encoded_photo
        failure = self.commit("update student photo")
        if failure:
            return failure

        log_with_context(self.logger, "INFO", "Updated student photo",
                         context={"student_id": student.id})
        return Outcome.ok(student_payload(student))

    def register_courses(self, request: RegisterStudentCoursesRequest) -> Outcome:
        """
        Register a student for several courses at once.

        Unknown courses and courses the student already has become warnings;
        the rest are saved together.
        """
        if is_blank(request.student_id):
            return Outcome.bad_request("Student id is required")
        if len(request.course_ids) < 1:
            return Outcome.bad_request("A minimum of one course is required.")
        if any(is_blank(course_id) for course_id in request.course_ids):
            return Outcome.bad_request("Not all course id are valid")

        student = self.db.get(Student, request.student_id)
        if student is None:
            return Outcome.not_found(
                "Student with id: {} could be not found".format(request.student_id))

        warnings = []
        registered = []
        for course_id in request.course_ids:
            course = self.db.get(Course, course_id)
            if course is None:
                warnings.append(Issue(
                    status=404,
                    code=COURSE_NOT_FOUND,
                    title="Course Not Found",
                    detail="Course with id: {}, is not part of the available courses.".format(course_id),
                ))
                continue

            already = course_id in registered or self.db.query(StudentCourse.id).filter(
                StudentCourse.student_id == student.id,
                StudentCourse.course_id == course_id
            ).first() is not None
            if already:
                warnings.append(Issue(
                    status=300,
                    code=COURSE_ALREADY_REGISTERED,
                    title="Already Registered",
                    detail="The course with id: {} has been formerly registered for student with id: {}".format(
                        course_id, student.id),
                ))
                continue

            self.db.add(StudentCourse(student_id=student.id, course_id=course_id))
            registered.append(course_id)

        failure = self.commit("register student courses")
        if failure:
            failure.warnings = warnings
            return failure

        log_with_context(self.logger, "INFO",
            "Registered {} courses for student, {} warnings".format(len(registered), len(warnings)),
            context={"student_id": student.id})
        return Outcome.ok({"studentId": student.id, "registeredCourseIds": registered},
                          warnings=warnings)

    def list_courses(self, matric_no: str) -> Outcome:
        if is_blank(matric_no):
            return Outcome.bad_request("Student's matric number is required!")
        student = self.db.query(Student).options(
            selectinload(Student.courses).selectinload(StudentCourse.course)
        ).filter(Student.matric_no == normalize_matric(matric_no)).first()
        if student is None:
            return Outcome.not_found(
                "The matric number: {} does not match an existing student".format(matric_no))
        return Outcome.ok([course_payload(link.course) for link in student.courses])
