import logging
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from models.attendance import AttendanceRecord as AttendanceModel
from models.schools import School as SchoolModel
from models.teachers import Teacher as TeacherModel
from services.clock import Clock
from services.errors import ConstraintViolation
from services.store import commit_or_conflict, get_or_404
from services.validation import validate_school

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "A school with this name already exists"


def _name_taken(db: Session, name: str, exclude_id: Optional[int] = None) -> bool:
    stmt = select(SchoolModel.id).where(SchoolModel.name == name)
    if exclude_id is not None:
        stmt = stmt.where(SchoolModel.id != exclude_id)
    return db.execute(stmt).first() is not None


def list_schools(db: Session) -> List[SchoolModel]:
    return list(db.scalars(select(SchoolModel).order_by(SchoolModel.name)))


def get_school(db: Session, school_id: int) -> SchoolModel:
    return get_or_404(db, SchoolModel, school_id, "School")


def create_school(db: Session, clock: Clock, *, name: Optional[str], region: Optional[str] = None) -> SchoolModel:
    values = validate_school(name, region)
    if _name_taken(db, values["name"]):
        raise ConstraintViolation([DUPLICATE_NAME])

    school = SchoolModel(created_at=clock.now(), **values)
    db.add(school)
    # the unique index settles concurrent creates that both passed the check above
    commit_or_conflict(db, [DUPLICATE_NAME])
    db.refresh(school)
    logger.info("school created id=%s name=%r", school.id, school.name)
    return school


def update_school(db: Session, school_id: int, *, fields: dict) -> SchoolModel:
    """Apply a partial update; only name and region are writable."""
    school = get_school(db, school_id)
    values = validate_school(fields.get("name", school.name), fields.get("region", school.region))
    if _name_taken(db, values["name"], exclude_id=school.id):
        raise ConstraintViolation([DUPLICATE_NAME])

    school.name = values["name"]
    school.region = values["region"]
    commit_or_conflict(db, [DUPLICATE_NAME])
    db.refresh(school)
    logger.info("school updated id=%s", school.id)
    return school


def delete_school(db: Session, school_id: int) -> int:
    school = get_school(db, school_id)

    errors = []
    teacher_count = db.scalar(
        select(func.count(TeacherModel.id)).where(TeacherModel.school_id == school_id)
    )
    if teacher_count:
        errors.append(f"Cannot delete school: {teacher_count} teacher(s) still belong to it")
    record_count = db.scalar(
        select(func.count(AttendanceModel.id)).where(AttendanceModel.school_id == school_id)
    )
    if record_count:
        errors.append(f"Cannot delete school: {record_count} attendance record(s) reference it")
    if errors:
        raise ConstraintViolation(errors)

    db.delete(school)
    commit_or_conflict(db, ["Cannot delete school: dependent records exist"])
    logger.info("school deleted id=%s", school_id)
    return school_id
