import copy
import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified

from app.models.storage import StorageEntry

logger = logging.getLogger(__name__)


def get_entry(db: Session, key: str, for_update: bool = False) -> Optional[Dict[str, Any]]:
    entry = db.get(StorageEntry, key, with_for_update=for_update)
    if entry is None:
        return None
    # Detached copy so callers can mutate freely before writing back
    return copy.deepcopy(entry.value)


def ensure_entry(db: Session, key: str) -> None:
    """Create an empty entry for ``key`` if none exists yet.

    A concurrent writer may insert the same key first; that row is kept.
    """
    if db.get(StorageEntry, key) is not None:
        return
    db.add(StorageEntry(key=key, value={}))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.debug("Storage entry %s was created concurrently", key)


def put_entry(db: Session, key: str, value: Dict[str, Any]) -> None:
    entry = db.get(StorageEntry, key)
    if entry is None:
        db.add(StorageEntry(key=key, value=value))
    else:
        entry.value = value
        flag_modified(entry, "value")
    db.commit()
