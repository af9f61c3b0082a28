from datetime import datetime
from typing import Optional

from schemas.common import CamelModel


# ✅ create request body
# -> id and createdAt are assigned by the server
class ClassCreate(CamelModel):
    name: Optional[str] = None              # class name
    enrollment: Optional[int] = None        # students enrolled, 0..500
    teacher_id: Optional[int] = None        # teacher of the class (FK)


# ✅ update request body; the teacher cannot be changed
class ClassUpdate(CamelModel):
    name: Optional[str] = None
    enrollment: Optional[int] = None


# ✅ response / read schema
class ClassOut(CamelModel):
    id: int
    teacher_id: int
    name: str
    enrollment: int
    created_at: datetime
