"""
Course model - represents a course offered by the institution.
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Text, Integer, DateTime, String
from sqlalchemy.orm import relationship
from slat.database import Base


class Course(Base):
    """SQLAlchemy model for the courses table."""
    __tablename__ = "courses"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
                doc="Unique course identifier")
    code = Column(String(32), nullable=False,
                  doc="Course code, e.g. CSC101")
    title = Column(Text, nullable=False)
    unit = Column(Integer, nullable=False,
                  doc="Credit units, always positive")
    description = Column(Text, nullable=True)
    date_created = Column(DateTime, default=lambda: datetime.now(timezone.utc),
                          doc="Timestamp when course was created")

    lecturers = relationship("LecturerCourse", back_populates="course")
    students = relationship("StudentCourse", back_populates="course")
    lectures = relationship("Lecture", back_populates="course",
                            order_by="Lecture.date_created")

    def __repr__(self):
        return f"<Course(id={self.id}, code='{self.code}', unit={self.unit})>"
