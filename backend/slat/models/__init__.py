from slat.models.student import Student
from slat.models.lecturer import Lecturer
from slat.models.course import Course
from slat.models.lecture import Lecture
from slat.models.enrollment import LecturerCourse, StudentCourse
from slat.models.attendee import Attendee

__all__ = ["Student", "Lecturer", "Course", "Lecture", "LecturerCourse", "StudentCourse", "Attendee"]
