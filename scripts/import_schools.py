import csv
import logging
import sys
from typing import Iterable, Tuple

from sqlalchemy.orm import Session

from database.db import SessionLocal, init_db
from services.clock import Clock, SystemClock
from services.errors import DomainError
from services.school_service import create_school

logger = logging.getLogger(__name__)

CSV_PATH = "data/schools.csv"  # ✅ default file path (columns: name,region)


def import_school_rows(db: Session, rows: Iterable[dict], clock: Clock) -> Tuple[int, int]:
    """Create one school per row through the service; rejected rows are logged and skipped."""
    created = skipped = 0
    for line_no, row in enumerate(rows, start=2):  # line 1 is the header
        try:
            create_school(db, clock, name=row.get("name"), region=row.get("region") or None)
            created += 1
        except DomainError as exc:
            skipped += 1
            logger.warning("line %s skipped (%s): %s", line_no, row.get("name"), "; ".join(exc.errors))
    return created, skipped


def migrate_schools(csv_path: str = CSV_PATH) -> Tuple[int, int]:
    init_db()
    db: Session = SessionLocal()
    try:
        with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
            created, skipped = import_school_rows(db, csv.DictReader(csvfile), SystemClock())
    finally:
        db.close()
    logger.info("schools CSV -> DB done: %s created, %s skipped", created, skipped)
    return created, skipped


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    migrate_schools(sys.argv[1] if len(sys.argv) > 1 else CSV_PATH)
