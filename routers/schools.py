from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from schemas.common import SuccessEnvelope
from schemas.schools import SchoolCreate, SchoolOut, SchoolUpdate
from schemas.teachers import TeacherOut
from services import school_service, teacher_service
from services.clock import Clock, get_clock

router = APIRouter(prefix="/schools", tags=["schools"])


# ==========================================================
# [CRUD]
# ==========================================================

# ✅ [READ] all schools, by name
@router.get("", response_model=SuccessEnvelope[List[SchoolOut]])
def read_schools(db: Session = Depends(get_db)):
    schools = school_service.list_schools(db)
    return SuccessEnvelope(data=[SchoolOut.model_validate(s) for s in schools])


# ✅ [CREATE] new school (name must be unique)
@router.post("", status_code=201, response_model=SuccessEnvelope[SchoolOut])
def create_school(payload: SchoolCreate, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    school = school_service.create_school(db, clock, name=payload.name, region=payload.region)
    return SuccessEnvelope(data=SchoolOut.model_validate(school), message="School created")


# ✅ [READ] one school
@router.get("/{school_id}", response_model=SuccessEnvelope[SchoolOut])
def read_school(school_id: int, db: Session = Depends(get_db)):
    return SuccessEnvelope(data=SchoolOut.model_validate(school_service.get_school(db, school_id)))


# ✅ [UPDATE] name / region
@router.put("/{school_id}", response_model=SuccessEnvelope[SchoolOut])
def update_school(school_id: int, payload: SchoolUpdate, db: Session = Depends(get_db)):
    school = school_service.update_school(db, school_id, fields=payload.model_dump(exclude_unset=True))
    return SuccessEnvelope(data=SchoolOut.model_validate(school), message="School updated")


# ✅ [DELETE] only when no teacher or attendance record references it
@router.delete("/{school_id}", response_model=SuccessEnvelope[dict])
def delete_school(school_id: int, db: Session = Depends(get_db)):
    deleted_id = school_service.delete_school(db, school_id)
    return SuccessEnvelope(data={"id": deleted_id}, message="School deleted")


# ==========================================================
# [nested]
# ==========================================================

# ✅ [READ] teachers of a school
@router.get("/{school_id}/teachers", response_model=SuccessEnvelope[List[TeacherOut]])
def read_school_teachers(school_id: int, db: Session = Depends(get_db)):
    teachers = teacher_service.list_school_teachers(db, school_id)
    return SuccessEnvelope(data=[TeacherOut.model_validate(t) for t in teachers])
