"""
Resume store.

All resume records live in ONE namespaced storage entry holding a JSON map
``{resumeId: ResumeRecord}``. Every operation is a read-modify-write of that
entry inside its own DB session. Read-modify-write cycles are serialized
within the process, so writers on different ids never drop each other's
records; concurrent writes to the same id are last-write-wins.
"""
from typing import Any, Callable, Dict, Iterator, List, Optional, Union
from contextlib import contextmanager
from datetime import datetime
import logging
import threading
import uuid

from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import ValidationFailure
from app.crud import crud_storage
from app.db.database import SessionLocal
from app.schemas.ResumeSchemas import ResumeContent, ResumeRecord

logger = logging.getLogger(__name__)

# Fields a caller may merge into an existing record
UPDATABLE_FIELDS = ("content", "formValues", "css")

# Held from the read of the entry to its write-back
_write_lock = threading.Lock()


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return value


class ResumeStore:
    def __init__(self, session_factory: Callable[[], Session] = SessionLocal, key: Optional[str] = None):
        self.session_factory = session_factory
        self.key = key or settings.RESUME_STORE_KEY

    def _read(self, db: Session) -> Dict[str, Any]:
        return crud_storage.get_entry(db, self.key) or {}

    def _write(self, db: Session, data: Dict[str, Any]) -> None:
        crud_storage.put_entry(db, self.key, data)

    @contextmanager
    def _writing(self) -> Iterator[Session]:
        """Session for one read-modify-write of the entry, exclusive within the process."""
        with _write_lock:
            db = self.session_factory()
            try:
                crud_storage.ensure_entry(db, self.key)
                yield db
            finally:
                db.close()

    def create(self, content: Union[ResumeContent, Dict[str, Any]], form_values: Optional[Dict[str, Any]] = None) -> str:
        """Insert a new record and return its freshly generated id."""
        with self._writing() as db:
            data = crud_storage.get_entry(db, self.key, for_update=True) or {}
            resume_id = uuid.uuid4().hex
            while resume_id in data:
                resume_id = uuid.uuid4().hex

            try:
                record = ResumeRecord(
                    id=resume_id,
                    content=_to_jsonable(content),
                    formValues=_to_jsonable(form_values),
                    css="",
                    createdAt=datetime.now(),
                )
            except ValidationError as e:
                raise ValidationFailure("Resume content does not match the resume schema.", errors=e.errors(), cause=e)

            data[resume_id] = record.model_dump(mode="json")
            self._write(db, data)
            logger.info("Resume %s created", resume_id)
            return resume_id

    def get(self, resume_id: str) -> Optional[ResumeRecord]:
        db = self.session_factory()
        try:
            raw = self._read(db).get(resume_id)
        finally:
            db.close()
        if raw is None:
            return None
        return ResumeRecord.model_validate(raw)

    def update(self, resume_id: str, partial: Dict[str, Any]) -> Optional[ResumeRecord]:
        """Merge ``partial`` into an existing record.

        Unknown ids are a silent no-op (returns None). ``id`` and ``createdAt``
        are never overwritten.
        """
        with self._writing() as db:
            data = crud_storage.get_entry(db, self.key, for_update=True) or {}
            existing = data.get(resume_id)
            if existing is None:
                logger.debug("Ignoring update for unknown resume %s", resume_id)
                return None

            changes = {k: _to_jsonable(v) for k, v in partial.items() if k in UPDATABLE_FIELDS}
            try:
                record = ResumeRecord.model_validate({**existing, **changes})
            except ValidationError as e:
                raise ValidationFailure("Resume update does not match the resume schema.", errors=e.errors(), cause=e)

            data[resume_id] = record.model_dump(mode="json")
            self._write(db, data)
            logger.info("Resume %s updated (%s)", resume_id, ", ".join(sorted(changes)) or "no fields")
            return record

    def clear_css(self, resume_id: str) -> Optional[ResumeRecord]:
        return self.update(resume_id, {"css": ""})

    def list(self) -> List[ResumeRecord]:
        """All records, most recently created first."""
        db = self.session_factory()
        try:
            data = self._read(db)
        finally:
            db.close()

        records: List[ResumeRecord] = []
        for resume_id, raw in data.items():
            try:
                records.append(ResumeRecord.model_validate(raw))
            except ValidationError:
                logger.warning("Skipping stored resume %s with an unexpected shape", resume_id)
        return sorted(records, key=lambda r: r.createdAt, reverse=True)

    def latest(self) -> Optional[ResumeRecord]:
        records = self.list()
        return records[0] if records else None
