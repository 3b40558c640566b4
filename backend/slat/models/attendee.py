"""
Attendee model - one student's attendance mark on one lecture.
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship
from slat.database import Base


class Attendee(Base):
    """
    SQLAlchemy model for the attendees table.

    At most one row exists per (student, lecture); marking the same student
    twice is a no-op.
    """
    __tablename__ = "attendees"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
                doc="Unique attendance mark identifier")
    student_id = Column(String(36), ForeignKey("students.id"), nullable=False, index=True)
    lecture_id = Column(String(36), ForeignKey("lectures.id"), nullable=False, index=True)
    date_created = Column(DateTime, default=lambda: datetime.now(timezone.utc),
                          doc="When the attendance was marked")

    student = relationship("Student", back_populates="attendances")
    lecture = relationship("Lecture", back_populates="attendees")

    __table_args__ = (
        UniqueConstraint("student_id", "lecture_id", name="uq_attendees_student_lecture"),
    )

    def __repr__(self):
        return f"<Attendee(student={self.student_id}, lecture={self.lecture_id})>"
