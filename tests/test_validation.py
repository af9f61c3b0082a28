from datetime import date

import pytest

from models.classes import Class as ClassModel
from models.schools import School as SchoolModel
from models.teachers import Teacher as TeacherModel
from services.errors import ValidationFailed
from services.validation import (
    check_class_belongs_to_teacher,
    check_teacher_belongs_to_school,
    clean_text,
    validate_attendance,
    validate_class,
    validate_school,
    validate_teacher,
)


@pytest.fixture
def seeded(db, clock):
    oak = SchoolModel(name="Oak Hill", region="North", created_at=clock.now())
    elm = SchoolModel(name="Elm St", region=None, created_at=clock.now())
    db.add_all([oak, elm])
    db.flush()
    smith = TeacherModel(name="J. Smith", school_id=oak.id, created_at=clock.now())
    jones = TeacherModel(name="A. Jones", school_id=elm.id, created_at=clock.now())
    db.add_all([smith, jones])
    db.flush()
    smith_class = ClassModel(name="3A", enrollment=30, teacher_id=smith.id, created_at=clock.now())
    jones_class = ClassModel(name="4B", enrollment=28, teacher_id=jones.id, created_at=clock.now())
    db.add_all([smith_class, jones_class])
    db.commit()
    return {"oak": oak, "elm": elm, "smith": smith, "jones": jones,
            "smith_class": smith_class, "jones_class": jones_class}


def _attendance(db, **overrides):
    values = dict(school_id=None, teacher_id=None, class_id=None, grade="Primary",
                  student_count=25, date_=date(2024, 3, 1), note=None)
    values.update(overrides)
    return validate_attendance(db, **values)


def test_clean_text_trims_and_blanks_to_none():
    assert clean_text("  Oak  ") == "Oak"
    assert clean_text("   ") is None
    assert clean_text(None) is None


def test_school_is_normalized():
    assert validate_school("  Oak Hill ", "  ") == {"name": "Oak Hill", "region": None}


def test_school_reports_every_violation():
    with pytest.raises(ValidationFailed) as info:
        validate_school("   ", "r" * 101)
    assert info.value.errors == [
        "School name is required",
        "Region cannot exceed 100 characters",
    ]


def test_school_name_length_boundary():
    assert validate_school("n" * 200, None)["name"] == "n" * 200
    with pytest.raises(ValidationFailed):
        validate_school("n" * 201, None)


def test_teacher_requires_existing_school(db, seeded):
    assert validate_teacher(db, " J. Doe ", seeded["oak"].id) == {"name": "J. Doe", "school_id": seeded["oak"].id}
    with pytest.raises(ValidationFailed) as info:
        validate_teacher(db, "", 999)
    assert info.value.errors == ["Teacher name is required", "Invalid school ID"]


@pytest.mark.parametrize("enrollment", [-1, 501])
def test_class_enrollment_range(db, seeded, enrollment):
    with pytest.raises(ValidationFailed) as info:
        validate_class(db, "3A", enrollment, seeded["smith"].id)
    assert info.value.errors == ["Enrollment must be between 0 and 500"]


def test_class_enrollment_bounds_accepted(db, seeded):
    assert validate_class(db, "3A", 0, seeded["smith"].id)["enrollment"] == 0
    assert validate_class(db, "3A", 500, seeded["smith"].id)["enrollment"] == 500


def test_attendance_accepts_consistent_record(db, seeded):
    values = _attendance(
        db,
        school_id=seeded["oak"].id,
        teacher_id=seeded["smith"].id,
        class_id=seeded["smith_class"].id,
        grade="  Primary ",
        note="   ",
    )
    assert values["grade"] == "Primary"
    assert values["note"] is None
    assert values["class_id"] == seeded["smith_class"].id


def test_attendance_rejects_teacher_from_other_school(db, seeded):
    with pytest.raises(ValidationFailed) as info:
        _attendance(db, school_id=seeded["oak"].id, teacher_id=seeded["jones"].id)
    assert info.value.errors == ["Teacher does not belong to the selected school"]


def test_attendance_rejects_class_of_other_teacher(db, seeded):
    with pytest.raises(ValidationFailed) as info:
        _attendance(
            db,
            school_id=seeded["oak"].id,
            teacher_id=seeded["smith"].id,
            class_id=seeded["jones_class"].id,
        )
    assert info.value.errors == ["Class does not belong to the selected teacher"]


def test_attendance_collects_field_errors(db, seeded):
    with pytest.raises(ValidationFailed) as info:
        _attendance(
            db,
            school_id=None,
            teacher_id=None,
            class_id=12345,
            grade=" ",
            student_count=201,
            date_=None,
            note="x" * 501,
        )
    assert info.value.errors == [
        "School ID is required",
        "Teacher ID is required",
        "Invalid class ID",
        "Grade is required",
        "Student count must be between 0 and 200",
        "Date is required",
        "Note cannot exceed 500 characters",
    ]


def test_attendance_accepts_any_calendar_date(db, seeded):
    values = _attendance(
        db, school_id=seeded["oak"].id, teacher_id=seeded["smith"].id, date_=date(1999, 12, 31), student_count=0
    )
    assert values["date"] == date(1999, 12, 31)
    assert values["student_count"] == 0


def test_cross_entity_checks(seeded):
    assert check_teacher_belongs_to_school(seeded["oak"].id, seeded["smith"])
    assert not check_teacher_belongs_to_school(seeded["oak"].id, seeded["jones"])
    assert not check_teacher_belongs_to_school(seeded["oak"].id, None)
    assert check_class_belongs_to_teacher(seeded["smith"].id, seeded["smith_class"])
    assert not check_class_belongs_to_teacher(seeded["smith"].id, seeded["jones_class"])
