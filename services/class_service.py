import logging
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from models.attendance import AttendanceRecord as AttendanceModel
from models.classes import Class as ClassModel
from services.clock import Clock
from services.store import commit_or_conflict, get_or_404
from services.teacher_service import get_teacher
from services.validation import validate_class

logger = logging.getLogger(__name__)


def list_classes(db: Session, teacher_id: Optional[int] = None) -> List[ClassModel]:
    stmt = select(ClassModel)
    if teacher_id is not None:
        stmt = stmt.where(ClassModel.teacher_id == teacher_id)
    return list(db.scalars(stmt.order_by(ClassModel.name, ClassModel.id)))


def list_teacher_classes(db: Session, teacher_id: int) -> List[ClassModel]:
    get_teacher(db, teacher_id)
    return list_classes(db, teacher_id=teacher_id)


def get_class(db: Session, class_id: int) -> ClassModel:
    return get_or_404(db, ClassModel, class_id, "Class")


def create_class(
    db: Session, clock: Clock, *, name: Optional[str], enrollment: Optional[int], teacher_id: Optional[int]
) -> ClassModel:
    values = validate_class(db, name, enrollment, teacher_id)
    klass = ClassModel(created_at=clock.now(), **values)
    db.add(klass)
    commit_or_conflict(db, ["Invalid teacher ID"])
    db.refresh(klass)
    logger.info("class created id=%s teacher_id=%s", klass.id, klass.teacher_id)
    return klass


def update_class(db: Session, class_id: int, *, fields: dict) -> ClassModel:
    """Only name and enrollment are writable; the owning teacher is fixed."""
    klass = get_class(db, class_id)
    values = validate_class(
        db,
        fields.get("name", klass.name),
        fields.get("enrollment", klass.enrollment),
        klass.teacher_id,
    )
    klass.name = values["name"]
    klass.enrollment = values["enrollment"]
    commit_or_conflict(db, ["Class update rejected by the store"])
    db.refresh(klass)
    logger.info("class updated id=%s", klass.id)
    return klass


def delete_class(db: Session, class_id: int) -> int:
    """Delete the class; attendance rows that pointed at it keep existing with class_id = NULL."""
    klass = get_class(db, class_id)

    # explicit so the outcome does not depend on the backend enforcing ON DELETE SET NULL
    cleared = db.execute(
        update(AttendanceModel)
        .where(AttendanceModel.class_id == class_id)
        .values(class_id=None)
        .execution_options(synchronize_session="fetch")
    ).rowcount
    db.delete(klass)
    commit_or_conflict(db, ["Class could not be deleted"])
    logger.info("class deleted id=%s (attendance rows detached: %s)", class_id, cleared)
    return class_id
