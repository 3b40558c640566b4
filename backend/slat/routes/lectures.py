"""
Lecture and attendance routes.
"""

from fastapi import APIRouter

from slat.dependencies import AttendanceServiceDep, LectureServiceDep
from slat.responses import render
from slat.schemas import CreateLectureRequest, MarkAttendanceRequest

router = APIRouter()


@router.post("/lectures")
def create_lecture(request: CreateLectureRequest, service: LectureServiceDep):
    """Create a lecture for a course the lecturer is assigned to."""
    return render(service.create_lecture(request))


@router.get("/lectures/{lecture_id}/attendees")
def list_lecture_attendees(lecture_id: str, service: LectureServiceDep):
    return render(service.list_attendees(lecture_id))


@router.post("/attendance")
def mark_attendance(request: MarkAttendanceRequest, service: AttendanceServiceDep):
    """
    Mark a student present at a lecture.

    Marking the same student twice succeeds both times and records one
    attendance.
    """
    return render(service.mark_attendance(request))
