"""
Lecturer model - represents a member of staff who delivers lectures.
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Text, Integer, DateTime, String
from sqlalchemy.orm import relationship
from slat.database import Base


class Lecturer(Base):
    """
    SQLAlchemy model for the lecturers table.

    Lecturers own courses through the lecturer_courses join table and
    authenticate with an emailed access code.
    """
    __tablename__ = "lecturers"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
                doc="Unique lecturer identifier")
    email = Column(String(255), nullable=False, unique=True,
                   doc="Lecturer email, used for lookup and access codes")
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    photo = Column(Text, nullable=True,
                   doc="Base64 encoded photograph")
    access_code = Column(Integer, nullable=True,
                         doc="Last issued access code")
    date_created = Column(DateTime, default=lambda: datetime.now(timezone.utc),
                          doc="Timestamp when lecturer record was created")

    courses = relationship("LecturerCourse", back_populates="lecturer")
    lectures = relationship("Lecture", back_populates="lecturer")

    def __repr__(self):
        return f"<Lecturer(id={self.id}, email='{self.email}')>"
