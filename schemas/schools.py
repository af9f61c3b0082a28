from datetime import datetime
from typing import Optional

from schemas.common import CamelModel


# ==========================================================
# [input schemas]
# required-ness and length rules live in services/validation.py
# so every violation is reported together
# ==========================================================
class SchoolCreate(CamelModel):
    name: Optional[str] = None          # school name (required, <= 200)
    region: Optional[str] = None        # region / community (optional, <= 100)


class SchoolUpdate(CamelModel):
    name: Optional[str] = None
    region: Optional[str] = None


# ==========================================================
# [output schema]
# ==========================================================
class SchoolOut(CamelModel):
    id: int
    name: str
    region: Optional[str] = None
    created_at: datetime
