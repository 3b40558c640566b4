"""
Serializers that shape ORM rows into camelCase API payloads.

Access codes are never part of any payload.
"""

from typing import Optional

from slat.models import Attendee, Course, Lecture, Lecturer, Student


def iso(value) -> Optional[str]:
    return value.isoformat() if value else None


def course_payload(course: Course) -> dict:
    return {
        "courseId": course.id,
        "courseCode": course.code,
        "courseTitle": course.title,
        "courseUnit": course.unit,
        "courseDescription": course.description,
        "dateCreated": iso(course.date_created),
    }


def course_with_lecturers_payload(course: Course) -> dict:
    payload = course_payload(course)
    payload["lecturers"] = [lecturer_payload(link.lecturer) for link in course.lecturers]
    return payload


def lecturer_payload(lecturer: Lecturer) -> dict:
    return {
        "id": lecturer.id,
        "email": lecturer.email,
        "firstName": lecturer.first_name,
        "lastName": lecturer.last_name,
        "photo": lecturer.photo,
    }


def lecturer_with_courses_payload(lecturer: Lecturer) -> dict:
    """Lecturer profile plus assigned courses; courses is null when none."""
    payload = lecturer_payload(lecturer)
    payload["dateCreated"] = iso(lecturer.date_created)
    payload["courses"] = (
        [course_payload(link.course) for link in lecturer.courses]
        if lecturer.courses else None
    )
    return payload


def student_payload(student: Student) -> dict:
    return {
        "id": student.id,
        "matricNo": student.matric_no,
        "email": student.email,
        "firstName": student.first_name,
        "lastName": student.last_name,
        "photo": student.photo,
        "dateCreated": iso(student.date_created),
    }


def attendee_payload(attendee: Attendee) -> dict:
    student = attendee.student
    return {
        "matricNo": student.matric_no,
        "email": student.email,
        "firstName": student.first_name,
        "lastName": student.last_name,
    }


def lecture_payload(lecture: Lecture) -> dict:
    return {
        "id": lecture.id,
        "title": lecture.title,
        "description": lecture.description,
        "courseId": lecture.course_id,
        "lecturerId": lecture.lecturer_id,
        "dateCreated": iso(lecture.date_created),
    }


def lecture_with_attendees_payload(lecture: Lecture) -> dict:
    return {
        "id": lecture.id,
        "title": lecture.title,
        "description": lecture.description,
        "attendees": [attendee_payload(a) for a in lecture.attendees],
        "dateCreated": iso(lecture.date_created),
    }
