from datetime import datetime
from typing import Optional

from schemas.common import CamelModel


# ✅ create payload
class TeacherCreate(CamelModel):
    name: Optional[str] = None               # teacher full name
    school_id: Optional[int] = None          # owning school id


# ✅ partial update payload (name and/or school reassignment)
class TeacherUpdate(CamelModel):
    name: Optional[str] = None
    school_id: Optional[int] = None


# ✅ response shape
class TeacherOut(CamelModel):
    id: int
    school_id: int
    name: str
    created_at: datetime
