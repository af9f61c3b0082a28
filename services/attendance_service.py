import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from models.attendance import AttendanceRecord as AttendanceModel
from services.attendance_query import AttendanceView, joined_select, to_view
from services.clock import Clock
from services.errors import NotFoundError
from services.store import commit_or_conflict
from services.validation import validate_attendance

logger = logging.getLogger(__name__)


def get_attendance(db: Session, record_id: int) -> AttendanceView:
    row = db.execute(joined_select().where(AttendanceModel.id == record_id)).first()
    if row is None:
        raise NotFoundError("Attendance record", record_id)
    return to_view(row)


def create_attendance(
    db: Session,
    clock: Clock,
    *,
    school_id: Optional[int],
    teacher_id: Optional[int],
    grade: Optional[str],
    student_count: Optional[int],
    date: Optional[date],
    class_id: Optional[int] = None,
    note: Optional[str] = None,
) -> AttendanceView:
    """Validate, insert, and return the record in its joined read shape. Records are never edited afterwards."""
    values = validate_attendance(
        db,
        school_id=school_id,
        teacher_id=teacher_id,
        class_id=class_id,
        grade=grade,
        student_count=student_count,
        date_=date,
        note=note,
    )
    record = AttendanceModel(created_at=clock.now(), **values)
    db.add(record)
    # a parent removed between validation and commit surfaces as an FK failure
    commit_or_conflict(db, ["Referenced school, teacher or class no longer exists"])
    logger.info(
        "attendance created id=%s school_id=%s teacher_id=%s date=%s count=%s",
        record.id, record.school_id, record.teacher_id, record.date, record.student_count,
    )
    return get_attendance(db, record.id)
