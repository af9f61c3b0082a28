from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.db import get_db
from schemas.classes import ClassOut
from schemas.common import SuccessEnvelope
from schemas.teachers import TeacherCreate, TeacherOut, TeacherUpdate
from services import class_service, teacher_service
from services.clock import Clock, get_clock

router = APIRouter(prefix="/teachers", tags=["teachers"])


# ==========================================================
# [CRUD]
# ==========================================================

# ✅ [READ] all teachers, optionally of one school
@router.get("", response_model=SuccessEnvelope[List[TeacherOut]])
def read_teachers(
    school_id: Optional[int] = Query(None, alias="schoolId"),
    db: Session = Depends(get_db),
):
    teachers = teacher_service.list_teachers(db, school_id=school_id)
    return SuccessEnvelope(data=[TeacherOut.model_validate(t) for t in teachers])


# ✅ [CREATE] new teacher in an existing school
@router.post("", status_code=201, response_model=SuccessEnvelope[TeacherOut])
def create_teacher(payload: TeacherCreate, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    teacher = teacher_service.create_teacher(db, clock, name=payload.name, school_id=payload.school_id)
    return SuccessEnvelope(data=TeacherOut.model_validate(teacher), message="Teacher created")


# ✅ [READ] one teacher
@router.get("/{teacher_id}", response_model=SuccessEnvelope[TeacherOut])
def read_teacher(teacher_id: int, db: Session = Depends(get_db)):
    return SuccessEnvelope(data=TeacherOut.model_validate(teacher_service.get_teacher(db, teacher_id)))


# ✅ [UPDATE] rename / move to another school
@router.put("/{teacher_id}", response_model=SuccessEnvelope[TeacherOut])
def update_teacher(teacher_id: int, payload: TeacherUpdate, db: Session = Depends(get_db)):
    teacher = teacher_service.update_teacher(db, teacher_id, fields=payload.model_dump(exclude_unset=True))
    return SuccessEnvelope(data=TeacherOut.model_validate(teacher), message="Teacher updated")


# ✅ [DELETE] only without classes or attendance records
@router.delete("/{teacher_id}", response_model=SuccessEnvelope[dict])
def delete_teacher(teacher_id: int, db: Session = Depends(get_db)):
    deleted_id = teacher_service.delete_teacher(db, teacher_id)
    return SuccessEnvelope(data={"id": deleted_id}, message="Teacher deleted")


# ✅ [READ] classes of a teacher
@router.get("/{teacher_id}/classes", response_model=SuccessEnvelope[List[ClassOut]])
def read_teacher_classes(teacher_id: int, db: Session = Depends(get_db)):
    classes = class_service.list_teacher_classes(db, teacher_id)
    return SuccessEnvelope(data=[ClassOut.model_validate(c) for c in classes])
