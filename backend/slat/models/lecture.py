"""
Lecture model - a single class session of a course, delivered by a lecturer.

Attendance is recorded against lectures through the attendees table.
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Text, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import relationship
from slat.database import Base


class Lecture(Base):
    """SQLAlchemy model for the lectures table."""
    __tablename__ = "lectures"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
                doc="Unique lecture identifier")
    course_id = Column(String(36), ForeignKey("courses.id"), nullable=False,
                       doc="Course this lecture belongs to")
    lecturer_id = Column(String(36), ForeignKey("lecturers.id"), nullable=False,
                         doc="Lecturer who created and delivers the lecture")
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    date_created = Column(DateTime, default=lambda: datetime.now(timezone.utc),
                          doc="Timestamp when the lecture was created")

    course = relationship("Course", back_populates="lectures")
    lecturer = relationship("Lecturer", back_populates="lectures")
    attendees = relationship("Attendee", back_populates="lecture")

    __table_args__ = (
        Index("ix_lectures_course_id", "course_id"),
        Index("ix_lectures_lecturer_id", "lecturer_id"),
    )

    def __repr__(self):
        return f"<Lecture(id={self.id}, course={self.course_id}, title='{self.title}')>"
