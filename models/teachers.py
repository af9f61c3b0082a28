from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, index=True)                  # teacher id (PK)
    school_id = Column(
        Integer, ForeignKey("schools.id", ondelete="RESTRICT"), nullable=False, index=True
    )                                                                   # owning school (FK)
    name = Column(String(200), nullable=False)                          # full name
    created_at = Column(DateTime, nullable=False)                       # UTC, set once on create

    school = relationship("School", back_populates="teachers")

    # ✅ classes taught by this teacher (1:N)
    classes = relationship("Class", back_populates="teacher", passive_deletes="all")

    # ✅ attendance submitted by this teacher (1:N)
    attendance_records = relationship(
        "AttendanceRecord", back_populates="teacher", passive_deletes="all"
    )
