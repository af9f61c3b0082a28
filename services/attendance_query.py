"""
services/attendance_query.py

Selection + join over attendance_records. No aggregation happens here:
the list view, the single-record read and the stats path all start from `joined_select()`.

Filters (all optional, AND-combined):
- school_id                      exact
- school_name / grade / region   case-insensitive "contains" on the trimmed text
- start_date / end_date          inclusive bounds on the record date
Default order: date desc, then created_at desc (newest submission first within a day).
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Tuple

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from models.attendance import AttendanceRecord as AttendanceModel
from models.classes import Class as ClassModel
from models.schools import School as SchoolModel
from models.teachers import Teacher as TeacherModel
from services.errors import ValidationFailed
from services.validation import clean_text

MAX_PAGE_SIZE = 200

# public sort key -> column
SORT_FIELDS = {
    "date": AttendanceModel.date,
    "createdAt": AttendanceModel.created_at,
    "studentCount": AttendanceModel.student_count,
    "grade": AttendanceModel.grade,
    "schoolName": SchoolModel.name,
}


@dataclass
class AttendanceView:
    """Denormalized read shape of one attendance record."""

    id: int
    school_id: int
    school_name: str
    school_region: Optional[str]
    teacher_id: int
    teacher_name: str
    class_id: Optional[int]
    class_name: Optional[str]
    grade: str
    student_count: int
    date: date
    note: Optional[str]
    created_at: datetime


@dataclass
class AttendanceFilter:
    school_id: Optional[int] = None
    school_name: Optional[str] = None
    grade: Optional[str] = None
    region: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass
class AttendancePage:
    items: List[AttendanceView]
    total: int
    page: Optional[int] = None
    size: Optional[int] = None
    sort: Optional[str] = None


def joined_select(*columns) -> Select:
    """Records joined to school, teacher and (optional) class; `columns` overrides the projection."""
    columns = columns or (AttendanceModel, SchoolModel.name, SchoolModel.region, TeacherModel.name, ClassModel.name)
    return (
        select(*columns)
        .select_from(AttendanceModel)
        .join(SchoolModel, AttendanceModel.school_id == SchoolModel.id)
        .join(TeacherModel, AttendanceModel.teacher_id == TeacherModel.id)
        .outerjoin(ClassModel, AttendanceModel.class_id == ClassModel.id)
    )


def to_view(row) -> AttendanceView:
    record, school_name, school_region, teacher_name, class_name = row
    return AttendanceView(
        id=record.id,
        school_id=record.school_id,
        school_name=school_name,
        school_region=school_region,
        teacher_id=record.teacher_id,
        teacher_name=teacher_name,
        class_id=record.class_id,
        class_name=class_name,
        grade=record.grade,
        student_count=record.student_count,
        date=record.date,
        note=record.note,
        created_at=record.created_at,
    )


def _contains(column, text: str):
    # lower(column) LIKE lower(:text): both sides are folded by the database
    return column.icontains(text, autoescape=True)


def apply_date_range(stmt: Select, start_date: Optional[date], end_date: Optional[date]) -> Select:
    if start_date is not None:
        stmt = stmt.where(AttendanceModel.date >= start_date)
    if end_date is not None:
        stmt = stmt.where(AttendanceModel.date <= end_date)
    return stmt


def apply_filters(stmt: Select, flt: AttendanceFilter) -> Select:
    if flt.school_id is not None:
        stmt = stmt.where(AttendanceModel.school_id == flt.school_id)

    school_name = clean_text(flt.school_name)
    if school_name:
        stmt = stmt.where(_contains(SchoolModel.name, school_name))

    grade = clean_text(flt.grade)
    if grade:
        stmt = stmt.where(_contains(AttendanceModel.grade, grade))

    region = clean_text(flt.region)
    if region:
        stmt = stmt.where(SchoolModel.region.is_not(None), _contains(SchoolModel.region, region))

    return apply_date_range(stmt, flt.start_date, flt.end_date)


def parse_sort(sort: Optional[str]) -> Tuple[list, Optional[str]]:
    """'field,dir' -> ORDER BY clauses. None/blank -> default ordering."""
    default = [AttendanceModel.date.desc(), AttendanceModel.created_at.desc(), AttendanceModel.id.desc()]
    sort = clean_text(sort)
    if not sort:
        return default, None

    key, _, direction = (part.strip() for part in sort.partition(","))
    direction = (direction or "asc").lower()
    column = SORT_FIELDS.get(key)
    errors = []
    if column is None:
        errors.append(f"Unsupported sort field '{key}' (use one of: {', '.join(SORT_FIELDS)})")
    if direction not in ("asc", "desc"):
        errors.append("Sort direction must be 'asc' or 'desc'")
    if errors:
        raise ValidationFailed(errors)

    primary = column.desc() if direction == "desc" else column.asc()
    # remaining keys keep results deterministic
    return [primary] + default, f"{key},{direction}"


def query_attendance(db: Session, flt: Optional[AttendanceFilter] = None, sort: Optional[str] = None) -> List[AttendanceView]:
    """Every record matching the filter, as denormalized views."""
    order_by, _ = parse_sort(sort)
    stmt = apply_filters(joined_select(), flt or AttendanceFilter()).order_by(*order_by)
    return [to_view(row) for row in db.execute(stmt).all()]


def query_attendance_page(
    db: Session,
    flt: Optional[AttendanceFilter] = None,
    sort: Optional[str] = None,
    page: Optional[int] = None,
    size: Optional[int] = None,
) -> AttendancePage:
    """Same selection as query_attendance; paged when page or size is given."""
    order_by, applied_sort = parse_sort(sort)

    if page is None and size is None:
        items = query_attendance(db, flt, sort)
        return AttendancePage(items=items, total=len(items), sort=applied_sort)

    stmt = apply_filters(joined_select(), flt or AttendanceFilter())

    page = 1 if page is None else page
    size = 50 if size is None else size
    errors = []
    if page < 1:
        errors.append("Page must be 1 or greater")
    if not 1 <= size <= MAX_PAGE_SIZE:
        errors.append(f"Size must be between 1 and {MAX_PAGE_SIZE}")
    if errors:
        raise ValidationFailed(errors)

    total = db.scalar(apply_filters(joined_select(func.count(AttendanceModel.id)), flt or AttendanceFilter()))
    rows = db.execute(stmt.order_by(*order_by).offset((page - 1) * size).limit(size)).all()
    return AttendancePage(
        items=[to_view(row) for row in rows], total=total, page=page, size=size, sort=applied_sort
    )
