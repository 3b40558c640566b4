"""
Student routes - administration, course registration, photos, lookups and
access codes.

Matric numbers usually contain slashes (F/HD/20/3210001), so the lookup
route takes the rest of the path and is registered last.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from slat.dependencies import AccessServiceDep, StudentServiceDep
from slat.responses import render
from slat.schemas import (
    CreateStudentRequest, RegisterStudentCoursesRequest, UpdateStudentPhotoRequest,
)

router = APIRouter()


@router.post("/students")
def create_student(request: CreateStudentRequest, service: StudentServiceDep):
    return render(service.create_student(request))


@router.post("/students/batch")
def create_students(requests: List[CreateStudentRequest], service: StudentServiceDep):
    """Create several students; duplicates and invalid items come back as warnings."""
    return render(service.create_students(requests))


@router.get("/students")
def list_students(service: StudentServiceDep):
    return render(service.list_students())


@router.post("/students/photo")
def update_student_photo(request: UpdateStudentPhotoRequest, service: StudentServiceDep):
    return render(service.update_photo(request))


@router.get("/students/access/request")
def request_student_access(
    service: AccessServiceDep,
    matric_number: Optional[str] = Query(None, alias="matricNumber", description="Student matric number"),
):
    """Generate a new access code and email it to the student."""
    return render(service.request_student_access(matric_number))


@router.get("/students/access/verify")
def verify_student_access(
    service: AccessServiceDep,
    matric_number: Optional[str] = Query(None, alias="matricNumber", description="Student matric number"),
    access_code: Optional[int] = Query(None, alias="accessCode", description="Emailed access code"),
):
    return render(service.verify_student_access(matric_number, access_code))


@router.post("/student-courses")
def register_student_courses(request: RegisterStudentCoursesRequest, service: StudentServiceDep):
    """Register a student for courses; unknown or repeated courses come back as warnings."""
    return render(service.register_courses(request))


@router.get("/student-courses")
def list_student_courses(
    service: StudentServiceDep,
    matric_number: Optional[str] = Query(None, alias="matricNumber", description="Student matric number"),
):
    return render(service.list_courses(matric_number))


@router.get("/students/{matric_no:path}")
def get_student(matric_no: str, service: StudentServiceDep):
    return render(service.get_student(matric_no))
