from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.db import get_db
from schemas.attendance import (
    AttendanceCreate,
    AttendanceOut,
    RegionSummaryOut,
    SchoolSummaryOut,
    StatsSummaryOut,
)
from schemas.common import SuccessEnvelope, make_meta
from services import attendance_service
from services.attendance_query import AttendanceFilter, query_attendance_page
from services.attendance_stats import summarize
from services.clock import Clock, get_clock

router = APIRouter(prefix="/attendance", tags=["attendance"])


# ==========================================================
# [write]
# ==========================================================

# ✅ [CREATE] attendance submission (records are immutable afterwards)
@router.post("", status_code=201, response_model=SuccessEnvelope[AttendanceOut])
def create_attendance(payload: AttendanceCreate, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    view = attendance_service.create_attendance(
        db,
        clock,
        school_id=payload.school_id,
        teacher_id=payload.teacher_id,
        class_id=payload.class_id,
        grade=payload.grade,
        student_count=payload.student_count,
        date=payload.date,
        note=payload.note,
    )
    return SuccessEnvelope(data=AttendanceOut.model_validate(view), message="Attendance recorded")


# ==========================================================
# [read / report]
# ==========================================================

# ✅ [READ] filtered list, newest date first unless `sort` says otherwise
@router.get("", response_model=SuccessEnvelope[List[AttendanceOut]])
def read_attendance_list(
    school_id: Optional[int] = Query(None, alias="schoolId"),
    school_name: Optional[str] = Query(None, alias="schoolName", description="contains, case-insensitive"),
    grade: Optional[str] = Query(None, description="contains, case-insensitive"),
    region: Optional[str] = Query(None, description="contains, case-insensitive"),
    start_date: Optional[date] = Query(None, alias="startDate", description="inclusive, e.g. 2024-01-01"),
    end_date: Optional[date] = Query(None, alias="endDate", description="inclusive"),
    sort: Optional[str] = Query(None, description='e.g. "studentCount,desc"'),
    page: Optional[int] = Query(None, description="1-based; omit for the full list"),
    size: Optional[int] = Query(None, description="page size, max 200"),
    db: Session = Depends(get_db),
):
    flt = AttendanceFilter(
        school_id=school_id,
        school_name=school_name,
        grade=grade,
        region=region,
        start_date=start_date,
        end_date=end_date,
    )
    result = query_attendance_page(db, flt, sort=sort, page=page, size=size)
    meta = None
    if result.page is not None:
        meta = make_meta(result.total, result.page, result.size, result.sort)
    return SuccessEnvelope(
        data=[AttendanceOut.model_validate(v) for v in result.items],
        message=f"{result.total} record(s)",
        meta=meta,
    )


# ✅ [STATS] totals and per-school / per-region averages
@router.get("/stats/summary", response_model=SuccessEnvelope[StatsSummaryOut])
def read_stats_summary(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    stats = summarize(db, start_date=start_date, end_date=end_date)
    data = StatsSummaryOut(
        total_submissions=stats.total_submissions,
        total_students=stats.total_students,
        average_students_per_record=stats.average_students_per_record,
        school_summaries=[
            SchoolSummaryOut(
                school_name=s.key,
                total_students=s.total_students,
                submissions_count=s.submissions_count,
                average_students=s.average_students,
            )
            for s in stats.school_summaries
        ],
        region_summaries=[
            RegionSummaryOut(
                region=r.key,
                total_students=r.total_students,
                submissions_count=r.submissions_count,
                average_students=r.average_students,
            )
            for r in stats.region_summaries
        ],
    )
    return SuccessEnvelope(data=data)


# ✅ [READ] one record
@router.get("/{record_id}", response_model=SuccessEnvelope[AttendanceOut])
def read_attendance(record_id: int, db: Session = Depends(get_db)):
    return SuccessEnvelope(data=AttendanceOut.model_validate(attendance_service.get_attendance(db, record_id)))
