"""
Pydantic request schemas.

Request bodies use camelCase keys. Every field is optional at the schema
level: presence checks happen in the services so that a missing field
produces the endpoint's own 400 message instead of a framework error.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateCourseRequest(CamelModel):
    course_code: Optional[str] = Field(None, description="Course code, e.g. CSC101")
    course_title: Optional[str] = None
    course_unit: Optional[int] = Field(None, description="Credit units, must be positive")
    course_description: Optional[str] = None


class CreateLecturerRequest(CamelModel):
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    photo: Optional[str] = Field(None, description="Base64 encoded photograph")


class CreateStudentRequest(CamelModel):
    email: Optional[str] = None
    matric_no: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    photo: Optional[str] = None


class AssignLecturerToCourseRequest(CamelModel):
    lecturer_id: Optional[str] = None
    course_id: Optional[str] = None


class RegisterStudentCoursesRequest(CamelModel):
    student_id: Optional[str] = None
    course_ids: List[Optional[str]] = Field(default_factory=list)


class CreateLectureRequest(CamelModel):
    lecturer_id: Optional[str] = None
    course_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None


class MarkAttendanceRequest(CamelModel):
    matric_no: Optional[str] = None
    lecture_id: Optional[str] = None


class UpdateStudentPhotoRequest(CamelModel):
    id: Optional[str] = None
    encoded_photo: Optional[str] = None
