"""
Attendance ranking reports.
"""

from fastapi import APIRouter

from slat.dependencies import ReportServiceDep
from slat.responses import render

router = APIRouter()


@router.get("/reports/students-ranking")
def students_ranking(service: ReportServiceDep):
    """Students ranked by number of lectures attended."""
    return render(service.students_ranking())


@router.get("/reports/courses-ranking")
def courses_ranking(service: ReportServiceDep):
    """Courses ranked by attendance across all their lectures."""
    return render(service.courses_ranking())


@router.get("/reports/lecturers-ranking")
def lecturers_ranking(service: ReportServiceDep):
    """Lecturers ranked by attendance across the courses they teach."""
    return render(service.lecturers_ranking())
