"""
Student model - represents a student who attends lectures.

Students are identified by their matric number for attendance marking and
access-code requests. Email and matric number are both unique.
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Text, Integer, DateTime, String
from sqlalchemy.orm import relationship
from slat.database import Base


class Student(Base):
    """
    SQLAlchemy model for the students table.

    The access_code column stays NULL until the student first requests
    access; each request overwrites it with a fresh 6-digit code.
    """
    __tablename__ = "students"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
                doc="Unique student identifier")
    email = Column(String(255), nullable=False, unique=True,
                   doc="Student email, where access codes are delivered")
    matric_no = Column(String(64), nullable=False, unique=True,
                       doc="Matriculation number issued by the institution")
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    photo = Column(Text, nullable=True,
                   doc="Base64 encoded passport photograph")
    access_code = Column(Integer, nullable=True,
                         doc="Last issued access code")
    date_created = Column(DateTime, default=lambda: datetime.now(timezone.utc),
                          doc="Timestamp when student record was created")

    courses = relationship("StudentCourse", back_populates="student")
    attendances = relationship("Attendee", back_populates="student")

    @property
    def full_name(self):
        return "{} {}".format(self.first_name, self.last_name)

    def __repr__(self):
        return f"<Student(id={self.id}, matric_no='{self.matric_no}', email='{self.email}')>"
