from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from database.db import Base


class School(Base):
    __tablename__ = "schools"

    id = Column(Integer, primary_key=True, index=True)           # school id (PK)
    name = Column(String(200), nullable=False, unique=True)      # exact-string unique, stored trimmed
    region = Column(String(100), nullable=True)                  # region / community (optional)
    created_at = Column(DateTime, nullable=False)                # UTC, set once on create

    # ==========================================================
    # [relationships]
    # ==========================================================

    # ✅ teachers of this school (1:N, delete restricted by the FK)
    teachers = relationship("Teacher", back_populates="school", passive_deletes="all")

    # ✅ attendance submissions for this school (1:N, delete restricted by the FK)
    attendance_records = relationship(
        "AttendanceRecord", back_populates="school", passive_deletes="all"
    )
