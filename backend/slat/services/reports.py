"""
Attendance ranking reports.

Each report loads its entities together with the attendance rows beneath
them, counts those rows per entity and ranks by count, highest first:

- students: the student's own attendance marks
- courses: marks on every lecture of the course
- lecturers: marks on every lecture of every course the lecturer is
  assigned to

The sort is stable, so entities with equal counts keep the order in which
the store returned them (creation order). There is no pagination.
"""

import time

from sqlalchemy.orm import selectinload

from slat.logging_config import log_with_context
from slat.models import Course, Lecture, Lecturer, LecturerCourse, Student
from slat.responses import Outcome
from slat.services.base import Service


def rank(rows: list) -> list:
    """Sort rows by attendanceCount DESC and number them from 1."""
    ordered = sorted(rows, key=lambda row: row["attendanceCount"], reverse=True)
    for position, row in enumerate(ordered, 1):
        row["rank"] = position
    return ordered


class ReportService(Service):
    channel = "reports"

    def _done(self, name: str, rows: list, start_time: float) -> Outcome:
        duration_ms = (time.time() - start_time) * 1000
        log_with_context(self.logger, "INFO",
            "{} ranking generated: {} entries".format(name, len(rows)),
            extra_data={"duration_ms": round(duration_ms, 2), "entries": len(rows)})
        return Outcome.ok(rows)

    def students_ranking(self) -> Outcome:
        start_time = time.time()
        students = self.db.query(Student).options(
            selectinload(Student.attendances)
        ).order_by(Student.date_created).all()

        rows = [{
            "id": student.id,
            "matricNo": student.matric_no,
            "email": student.email,
            "firstName": student.first_name,
            "lastName": student.last_name,
            "attendanceCount": len(student.attendances),
        } for student in students]
        return self._done("Students", rank(rows), start_time)

    def courses_ranking(self) -> Outcome:
        start_time = time.time()
        courses = self.db.query(Course).options(
            selectinload(Course.lectures).selectinload(Lecture.attendees)
        ).order_by(Course.date_created).all()

        rows = []
        for course in courses:
            count = 0
            for lecture in course.lectures:
                count += len(lecture.attendees)
            rows.append({
                "courseId": course.id,
                "courseCode": course.code,
                "courseTitle": course.title,
                "lectureCount": len(course.lectures),
                "attendanceCount": count,
            })
        return self._done("Courses", rank(rows), start_time)

    def lecturers_ranking(self) -> Outcome:
        start_time = time.time()
        lecturers = self.db.query(Lecturer).options(
            selectinload(Lecturer.courses)
            .selectinload(LecturerCourse.course)
            .selectinload(Course.lectures)
            .selectinload(Lecture.attendees)
        ).order_by(Lecturer.date_created).all()

        rows = []
        for lecturer in lecturers:
            count = 0
            for link in lecturer.courses:
                for lecture in link.course.lectures:
                    count += len(lecture.attendees)
            rows.append({
                "id": lecturer.id,
                "email": lecturer.email,
                "firstName": lecturer.first_name,
                "lastName": lecturer.last_name,
                "courseCount": len(lecturer.courses),
                "attendanceCount": count,
            })
        return self._done("Lecturers", rank(rows), start_time)
