"""
services/attendance_stats.py

Summary statistics over attendance records inside an optional inclusive date range.
Averages are sum / count computed in Python so every backend returns the same float
(MySQL AVG() yields Decimal, SQLite a float).
`total_students` stays 0 on every level; the field exists for wire compatibility only.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models.attendance import AttendanceRecord as AttendanceModel
from models.schools import School as SchoolModel
from services.attendance_query import apply_date_range


@dataclass
class GroupSummary:
    key: str
    submissions_count: int
    average_students: float
    total_students: int = 0


@dataclass
class StatsSummary:
    total_submissions: int = 0
    average_students_per_record: float = 0.0
    school_summaries: List[GroupSummary] = field(default_factory=list)
    region_summaries: List[GroupSummary] = field(default_factory=list)
    total_students: int = 0


def _average(total, count) -> float:
    return float(total) / count if count else 0.0


def _ranked(groups: Dict[str, List[int]]) -> List[GroupSummary]:
    """{key: [count, total]} -> summaries, most submissions first; ties alphabetical."""
    summaries = [
        GroupSummary(key=key, submissions_count=count, average_students=_average(total, count))
        for key, (count, total) in groups.items()
    ]
    summaries.sort(key=lambda s: (-s.submissions_count, s.key))
    return summaries


def summarize(db: Session, start_date: Optional[date] = None, end_date: Optional[date] = None) -> StatsSummary:
    # one grouped SELECT per call: totals, school and region groups come from the same rows
    stmt = (
        select(
            SchoolModel.name,
            SchoolModel.region,
            func.count(AttendanceModel.id),
            func.sum(AttendanceModel.student_count),
        )
        .select_from(AttendanceModel)
        .join(SchoolModel, AttendanceModel.school_id == SchoolModel.id)
        .group_by(SchoolModel.id, SchoolModel.name, SchoolModel.region)
    )
    rows = db.execute(apply_date_range(stmt, start_date, end_date)).all()
    if not rows:
        return StatsSummary()

    schools: Dict[str, List[int]] = {}
    regions: Dict[str, List[int]] = {}
    for name, region, count, total in rows:
        schools[name] = [count, total or 0]
        if region is not None:
            bucket = regions.setdefault(region, [0, 0])
            bucket[0] += count
            bucket[1] += total or 0

    count = sum(c for c, _ in schools.values())
    total = sum(t for _, t in schools.values())
    return StatsSummary(
        total_submissions=count,
        average_students_per_record=_average(total, count),
        school_summaries=_ranked(schools),
        region_summaries=_ranked(regions),
    )
