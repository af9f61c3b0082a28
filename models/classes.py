from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base


class Class(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)                  # class id (PK)
    teacher_id = Column(
        Integer, ForeignKey("teachers.id", ondelete="RESTRICT"), nullable=False, index=True
    )                                                                   # teacher of the class (FK)
    name = Column(String(200), nullable=False)                          # class name / label
    enrollment = Column(Integer, nullable=False, default=0)             # registered students, 0..500
    created_at = Column(DateTime, nullable=False)

    # ==========================================================
    # [relationships]
    # ==========================================================

    # ✅ N:1 with Teacher (Teacher.classes)
    teacher = relationship("Teacher", back_populates="classes")

    # ✅ attendance rows pointing at this class; the FK nulls itself out on delete
    attendance_records = relationship(
        "AttendanceRecord", back_populates="class_", passive_deletes=True
    )
