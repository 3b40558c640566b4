"""
Lecturer routes - administration, lookups, access codes and the lecturer's
attendance records.

Static paths (/lecturers/by-email, /lecturers/access/...) are registered
before /lecturers/{lecturer_id} so they are not captured by it.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from slat.dependencies import AccessServiceDep, LecturerServiceDep
from slat.responses import render
from slat.schemas import CreateLecturerRequest

router = APIRouter()


@router.post("/lecturers")
def create_lecturer(request: CreateLecturerRequest, service: LecturerServiceDep):
    return render(service.create_lecturer(request))


@router.post("/lecturers/batch")
def create_lecturers(requests: List[CreateLecturerRequest], service: LecturerServiceDep):
    """Create several lecturers; a duplicate email rejects the whole batch."""
    return render(service.create_lecturers(requests))


@router.get("/lecturers")
def list_lecturers(service: LecturerServiceDep):
    return render(service.list_lecturers())


@router.get("/lecturers/by-email")
def get_lecturer_by_email(
    service: LecturerServiceDep,
    lecturer_email: Optional[str] = Query(None, alias="lecturerEmail", description="Lecturer email"),
):
    return render(service.get_lecturer_by_email(lecturer_email))


@router.get("/lecturers/access/request")
def request_lecturer_access(
    service: AccessServiceDep,
    lecturer_email: Optional[str] = Query(None, alias="lecturerEmail", description="Lecturer email"),
):
    """Generate a new access code and email it to the lecturer."""
    return render(service.request_lecturer_access(lecturer_email))


@router.get("/lecturers/access/verify")
def verify_lecturer_access(
    service: AccessServiceDep,
    lecturer_email: Optional[str] = Query(None, alias="lecturerEmail", description="Lecturer email"),
    access_code: Optional[int] = Query(None, alias="accessCode", description="Emailed access code"),
):
    """Check an access code previously emailed to the lecturer."""
    return render(service.verify_lecturer_access(lecturer_email, access_code))


@router.get("/lecturers/{lecturer_id}")
def get_lecturer(lecturer_id: str, service: LecturerServiceDep):
    return render(service.get_lecturer(lecturer_id))


@router.get("/lecturers/{lecturer_id}/attendance-records")
def get_lecturer_attendance_records(lecturer_id: str, service: LecturerServiceDep):
    """Courses, lectures and attendees for everything the lecturer teaches."""
    return render(service.attendance_records(lecturer_id))
