import csv
import io

from models.schools import School as SchoolModel
from scripts.import_schools import import_school_rows


def test_import_creates_valid_rows_and_skips_the_rest(db, clock):
    source = io.StringIO(
        "name,region\n"
        "Oak Hill,North\n"
        "  Elm St  ,\n"
        "Oak Hill,South\n"
        "   ,East\n"
    )

    created, skipped = import_school_rows(db, csv.DictReader(source), clock)

    assert (created, skipped) == (2, 2)
    rows = {s.name: s.region for s in db.query(SchoolModel).all()}
    assert rows == {"Oak Hill": "North", "Elm St": None}
