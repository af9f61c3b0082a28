"""
services/validation.py

Field rules applied before anything reaches the session.
Every validate_* function collects *all* violations and raises ValidationFailed once,
or returns the normalized values (strings trimmed, empty optional text -> None).
"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from models.classes import Class as ClassModel
from models.schools import School as SchoolModel
from models.teachers import Teacher as TeacherModel
from services.errors import ValidationFailed

SCHOOL_NAME_MAX = 200
REGION_MAX = 100
TEACHER_NAME_MAX = 200
CLASS_NAME_MAX = 200
GRADE_MAX = 100
NOTE_MAX = 500
ENROLLMENT_RANGE = (0, 500)
STUDENT_COUNT_RANGE = (0, 200)


def clean_text(value: Optional[str]) -> Optional[str]:
    """Trim; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def _required_text(errors: list, value, label: str, max_len: int) -> Optional[str]:
    value = clean_text(value)
    if value is None:
        errors.append(f"{label} is required")
    elif len(value) > max_len:
        errors.append(f"{label} cannot exceed {max_len} characters")
    return value


def _optional_text(errors: list, value, label: str, max_len: int) -> Optional[str]:
    value = clean_text(value)
    if value is not None and len(value) > max_len:
        errors.append(f"{label} cannot exceed {max_len} characters")
    return value


def _int_in_range(errors: list, value, label: str, bounds: tuple) -> Optional[int]:
    low, high = bounds
    if value is None:
        errors.append(f"{label} is required")
    elif not low <= value <= high:
        errors.append(f"{label} must be between {low} and {high}")
    return value


def _raise_if(errors: list) -> None:
    if errors:
        raise ValidationFailed(errors)


# ==========================================================
# [cross-entity checks]
# ==========================================================

def check_teacher_belongs_to_school(school_id: int, teacher: TeacherModel) -> bool:
    return teacher is not None and teacher.school_id == school_id


def check_class_belongs_to_teacher(teacher_id: int, klass: ClassModel) -> bool:
    return klass is not None and klass.teacher_id == teacher_id


# ==========================================================
# [per-entity rules]
# ==========================================================

def validate_school(name: Optional[str], region: Optional[str]) -> dict:
    errors = []
    name = _required_text(errors, name, "School name", SCHOOL_NAME_MAX)
    region = _optional_text(errors, region, "Region", REGION_MAX)
    _raise_if(errors)
    return {"name": name, "region": region}


def validate_teacher(db: Session, name: Optional[str], school_id: Optional[int]) -> dict:
    errors = []
    name = _required_text(errors, name, "Teacher name", TEACHER_NAME_MAX)
    if school_id is None:
        errors.append("School ID is required")
    elif db.get(SchoolModel, school_id) is None:
        errors.append("Invalid school ID")
    _raise_if(errors)
    return {"name": name, "school_id": school_id}


def validate_class(
    db: Session, name: Optional[str], enrollment: Optional[int], teacher_id: Optional[int]
) -> dict:
    errors = []
    name = _required_text(errors, name, "Class name", CLASS_NAME_MAX)
    enrollment = _int_in_range(errors, enrollment, "Enrollment", ENROLLMENT_RANGE)
    if teacher_id is None:
        errors.append("Teacher ID is required")
    elif db.get(TeacherModel, teacher_id) is None:
        errors.append("Invalid teacher ID")
    _raise_if(errors)
    return {"name": name, "enrollment": enrollment, "teacher_id": teacher_id}


def validate_attendance(
    db: Session,
    *,
    school_id: Optional[int],
    teacher_id: Optional[int],
    class_id: Optional[int],
    grade: Optional[str],
    student_count: Optional[int],
    date_: Optional[date],
    note: Optional[str],
) -> dict:
    """Field rules plus school/teacher/class existence and ownership."""
    errors = []

    school = None
    if school_id is None:
        errors.append("School ID is required")
    else:
        school = db.get(SchoolModel, school_id)
        if school is None:
            errors.append("Invalid school ID")

    teacher = None
    if teacher_id is None:
        errors.append("Teacher ID is required")
    else:
        teacher = db.get(TeacherModel, teacher_id)
        if teacher is None:
            errors.append("Invalid teacher ID")
        elif school is not None and not check_teacher_belongs_to_school(school_id, teacher):
            errors.append("Teacher does not belong to the selected school")

    if class_id is not None:
        klass = db.get(ClassModel, class_id)
        if klass is None:
            errors.append("Invalid class ID")
        elif teacher is not None and not check_class_belongs_to_teacher(teacher_id, klass):
            errors.append("Class does not belong to the selected teacher")

    grade = _required_text(errors, grade, "Grade", GRADE_MAX)
    student_count = _int_in_range(errors, student_count, "Student count", STUDENT_COUNT_RANGE)
    if date_ is None:
        errors.append("Date is required")
    note = _optional_text(errors, note, "Note", NOTE_MAX)

    _raise_if(errors)
    return {
        "school_id": school_id,
        "teacher_id": teacher_id,
        "class_id": class_id,
        "grade": grade,
        "student_count": student_count,
        "date": date_,
        "note": note,
    }
