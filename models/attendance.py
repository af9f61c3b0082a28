from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"  # one submission per teacher/class/grade/day

    id = Column(Integer, primary_key=True, index=True)
    school_id = Column(
        Integer, ForeignKey("schools.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    teacher_id = Column(
        Integer, ForeignKey("teachers.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    class_id = Column(
        Integer, ForeignKey("classes.id", ondelete="SET NULL"), nullable=True, index=True
    )                                                                   # optional, cleared when the class goes
    grade = Column(String(100), nullable=False)                         # grade / cohort label
    student_count = Column(Integer, nullable=False)                     # students present, 0..200
    date = Column(Date, nullable=False, index=True)                     # attendance day (no time part)
    note = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False)                       # submission time (UTC)

    school = relationship("School", back_populates="attendance_records")
    teacher = relationship("Teacher", back_populates="attendance_records")
    class_ = relationship("Class", back_populates="attendance_records")
