"""
Course routes - creating courses, listing them, and assigning lecturers.
"""

from typing import List

from fastapi import APIRouter

from slat.dependencies import CourseServiceDep
from slat.responses import render
from slat.schemas import AssignLecturerToCourseRequest, CreateCourseRequest

router = APIRouter()


@router.post("/courses")
def create_course(request: CreateCourseRequest, service: CourseServiceDep):
    """Create a single course."""
    return render(service.create_course(request))


@router.post("/courses/batch")
def create_courses(requests: List[CreateCourseRequest], service: CourseServiceDep):
    """Create several courses; any invalid item rejects the whole batch."""
    return render(service.create_courses(requests))


@router.get("/courses")
def list_courses(service: CourseServiceDep):
    return render(service.list_courses())


@router.get("/courses/{course_id}")
def get_course(course_id: str, service: CourseServiceDep):
    """Fetch a course together with its assigned lecturers."""
    return render(service.get_course(course_id))


@router.post("/lecturer-courses")
def assign_lecturer_to_course(request: AssignLecturerToCourseRequest, service: CourseServiceDep):
    """Assign a lecturer to a course. Repeating an assignment is rejected."""
    return render(service.assign_lecturer(request))
