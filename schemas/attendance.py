import datetime as dt
from typing import List, Optional

from schemas.common import CamelModel


# ==========================================================
# [input schema]
# ==========================================================
class AttendanceCreate(CamelModel):
    school_id: Optional[int] = None
    teacher_id: Optional[int] = None
    class_id: Optional[int] = None          # optional, must be one of the teacher's classes
    grade: Optional[str] = None             # grade / cohort label
    student_count: Optional[int] = None     # students present, 0..200
    date: Optional[dt.date] = None          # attendance day (YYYY-MM-DD)
    note: Optional[str] = None


# ==========================================================
# [output schemas]
# ==========================================================
class AttendanceOut(CamelModel):
    id: int
    school_id: int
    school_name: str
    school_region: Optional[str] = None
    teacher_id: int
    teacher_name: str
    class_id: Optional[int] = None
    class_name: Optional[str] = None
    grade: str
    student_count: int
    date: dt.date
    note: Optional[str] = None
    created_at: dt.datetime


class SchoolSummaryOut(CamelModel):
    school_name: str
    total_students: int = 0
    submissions_count: int
    average_students: float


class RegionSummaryOut(CamelModel):
    region: str
    total_students: int = 0
    submissions_count: int
    average_students: float


class StatsSummaryOut(CamelModel):
    total_submissions: int = 0
    total_students: int = 0
    average_students_per_record: float = 0.0
    school_summaries: List[SchoolSummaryOut] = []
    region_summaries: List[RegionSummaryOut] = []
