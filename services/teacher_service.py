import logging
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from models.attendance import AttendanceRecord as AttendanceModel
from models.classes import Class as ClassModel
from models.teachers import Teacher as TeacherModel
from services.clock import Clock
from services.errors import ConstraintViolation
from services.school_service import get_school
from services.store import commit_or_conflict, get_or_404
from services.validation import validate_teacher

logger = logging.getLogger(__name__)


def list_teachers(db: Session, school_id: Optional[int] = None) -> List[TeacherModel]:
    stmt = select(TeacherModel)
    if school_id is not None:
        stmt = stmt.where(TeacherModel.school_id == school_id)
    return list(db.scalars(stmt.order_by(TeacherModel.name, TeacherModel.id)))


def list_school_teachers(db: Session, school_id: int) -> List[TeacherModel]:
    get_school(db, school_id)
    return list_teachers(db, school_id=school_id)


def get_teacher(db: Session, teacher_id: int) -> TeacherModel:
    return get_or_404(db, TeacherModel, teacher_id, "Teacher")


def create_teacher(db: Session, clock: Clock, *, name: Optional[str], school_id: Optional[int]) -> TeacherModel:
    values = validate_teacher(db, name, school_id)
    teacher = TeacherModel(created_at=clock.now(), **values)
    db.add(teacher)
    commit_or_conflict(db, ["Invalid school ID"])
    db.refresh(teacher)
    logger.info("teacher created id=%s school_id=%s", teacher.id, teacher.school_id)
    return teacher


def update_teacher(db: Session, teacher_id: int, *, fields: dict) -> TeacherModel:
    """Rename and/or move to another school; a teacher with attendance records stays put."""
    teacher = get_teacher(db, teacher_id)
    values = validate_teacher(
        db, fields.get("name", teacher.name), fields.get("school_id", teacher.school_id)
    )
    if values["school_id"] != teacher.school_id:
        record_count = db.scalar(
            select(func.count(AttendanceModel.id)).where(AttendanceModel.teacher_id == teacher_id)
        )
        if record_count:
            # stored records must keep naming a teacher of their own school
            raise ConstraintViolation(
                [f"Cannot move teacher to another school: {record_count} attendance record(s) reference them"]
            )
    teacher.name = values["name"]
    teacher.school_id = values["school_id"]
    commit_or_conflict(db, ["Invalid school ID"])
    db.refresh(teacher)
    logger.info("teacher updated id=%s", teacher.id)
    return teacher


def delete_teacher(db: Session, teacher_id: int) -> int:
    teacher = get_teacher(db, teacher_id)

    errors = []
    record_count = db.scalar(
        select(func.count(AttendanceModel.id)).where(AttendanceModel.teacher_id == teacher_id)
    )
    if record_count:
        errors.append(f"Cannot delete teacher: {record_count} attendance record(s) reference them")
    class_count = db.scalar(select(func.count(ClassModel.id)).where(ClassModel.teacher_id == teacher_id))
    if class_count:
        errors.append(f"Cannot delete teacher: {class_count} class(es) are assigned to them")
    if errors:
        raise ConstraintViolation(errors)

    db.delete(teacher)
    commit_or_conflict(db, ["Cannot delete teacher: dependent records exist"])
    logger.info("teacher deleted id=%s", teacher_id)
    return teacher_id
