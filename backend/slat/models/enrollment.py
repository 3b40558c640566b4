"""
Join tables between people and courses.

- LecturerCourse: a lecturer assigned to teach a course
- StudentCourse: a student registered for a course

Each pair may exist at most once; the unique constraints back up the
duplicate checks the services perform before inserting.
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship
from slat.database import Base


class LecturerCourse(Base):
    """SQLAlchemy model for the lecturer_courses table."""
    __tablename__ = "lecturer_courses"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    lecturer_id = Column(String(36), ForeignKey("lecturers.id"), nullable=False, index=True)
    course_id = Column(String(36), ForeignKey("courses.id"), nullable=False, index=True)
    date_created = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    lecturer = relationship("Lecturer", back_populates="courses")
    course = relationship("Course", back_populates="lecturers")

    __table_args__ = (
        UniqueConstraint("lecturer_id", "course_id", name="uq_lecturer_courses_pair"),
    )

    def __repr__(self):
        return f"<LecturerCourse(lecturer={self.lecturer_id}, course={self.course_id})>"


class StudentCourse(Base):
    """SQLAlchemy model for the student_courses table."""
    __tablename__ = "student_courses"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    student_id = Column(String(36), ForeignKey("students.id"), nullable=False, index=True)
    course_id = Column(String(36), ForeignKey("courses.id"), nullable=False, index=True)
    date_created = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    student = relationship("Student", back_populates="courses")
    course = relationship("Course", back_populates="students")

    __table_args__ = (
        UniqueConstraint("student_id", "course_id", name="uq_student_courses_pair"),
    )

    def __repr__(self):
        return f"<StudentCourse(student={self.student_id}, course={self.course_id})>"
