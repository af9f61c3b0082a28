import logging
from typing import List, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from services.errors import ConstraintViolation, NotFoundError

logger = logging.getLogger(__name__)

M = TypeVar("M")


def get_or_404(db: Session, model: Type[M], entity_id: int, label: str) -> M:
    obj = db.get(model, entity_id)
    if obj is None:
        raise NotFoundError(label, entity_id)
    return obj


def commit_or_conflict(db: Session, conflict_messages: List[str]) -> None:
    """Commit the unit of work; an IntegrityError rolls back and becomes ConstraintViolation."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("integrity error translated to constraint violation: %s", exc.orig)
        raise ConstraintViolation(conflict_messages) from exc
    except Exception:
        db.rollback()
        raise
