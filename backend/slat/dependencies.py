"""
FastAPI dependency providers.

Services are built per request with the request-scoped session. The mailer
and the access-code generator live on app.state (set by create_app) so tests
can swap them without touching globals.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from slat.database import get_db
from slat.services.access import AccessCodeService
from slat.services.attendance import AttendanceService
from slat.services.courses import CourseService
from slat.services.lecturers import LecturerService
from slat.services.lectures import LectureService
from slat.services.reports import ReportService
from slat.services.students import StudentService


def get_course_service(db: Session = Depends(get_db)) -> CourseService:
    return CourseService(db)


def get_lecturer_service(db: Session = Depends(get_db)) -> LecturerService:
    return LecturerService(db)


def get_student_service(db: Session = Depends(get_db)) -> StudentService:
    return StudentService(db)


def get_lecture_service(db: Session = Depends(get_db)) -> LectureService:
    return LectureService(db)


def get_attendance_service(db: Session = Depends(get_db)) -> AttendanceService:
    return AttendanceService(db)


def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    return ReportService(db)


def get_access_service(request: Request, db: Session = Depends(get_db)) -> AccessCodeService:
    """AccessCodeService wired to the application's mailer and code generator."""
    return AccessCodeService(
        db,
        mailer=request.app.state.mailer,
        code_generator=request.app.state.code_generator,
    )


# Type aliases for dependency injection
CourseServiceDep = Annotated[CourseService, Depends(get_course_service)]
LecturerServiceDep = Annotated[LecturerService, Depends(get_lecturer_service)]
StudentServiceDep = Annotated[StudentService, Depends(get_student_service)]
LectureServiceDep = Annotated[LectureService, Depends(get_lecture_service)]
AttendanceServiceDep = Annotated[AttendanceService, Depends(get_attendance_service)]
ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]
AccessServiceDep = Annotated[AccessCodeService, Depends(get_access_service)]
