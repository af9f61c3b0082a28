from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.db import get_db
from schemas.classes import ClassCreate, ClassOut, ClassUpdate
from schemas.common import SuccessEnvelope
from services import class_service
from services.clock import Clock, get_clock

router = APIRouter(prefix="/classes", tags=["classes"])


# ✅ [READ] all classes, optionally of one teacher
@router.get("", response_model=SuccessEnvelope[List[ClassOut]])
def read_classes(
    teacher_id: Optional[int] = Query(None, alias="teacherId"),
    db: Session = Depends(get_db),
):
    classes = class_service.list_classes(db, teacher_id=teacher_id)
    return SuccessEnvelope(data=[ClassOut.model_validate(c) for c in classes])


# ✅ [CREATE] class for an existing teacher
@router.post("", status_code=201, response_model=SuccessEnvelope[ClassOut])
def create_class(payload: ClassCreate, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    klass = class_service.create_class(
        db, clock, name=payload.name, enrollment=payload.enrollment, teacher_id=payload.teacher_id
    )
    return SuccessEnvelope(data=ClassOut.model_validate(klass), message="Class created")


@router.get("/{class_id}", response_model=SuccessEnvelope[ClassOut])
def read_class(class_id: int, db: Session = Depends(get_db)):
    return SuccessEnvelope(data=ClassOut.model_validate(class_service.get_class(db, class_id)))


# ✅ [UPDATE] name / enrollment
@router.put("/{class_id}", response_model=SuccessEnvelope[ClassOut])
def update_class(class_id: int, payload: ClassUpdate, db: Session = Depends(get_db)):
    klass = class_service.update_class(db, class_id, fields=payload.model_dump(exclude_unset=True))
    return SuccessEnvelope(data=ClassOut.model_validate(klass), message="Class updated")


# ✅ [DELETE] attendance rows that used the class keep existing without it
@router.delete("/{class_id}", response_model=SuccessEnvelope[dict])
def delete_class(class_id: int, db: Session = Depends(get_db)):
    deleted_id = class_service.delete_class(db, class_id)
    return SuccessEnvelope(data={"id": deleted_id}, message="Class deleted")
