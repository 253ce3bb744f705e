import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from . import store_notes
from .db import transaction
from .errors import InvalidInput
from .models import NOTE_STATUSES, NOTE_STATUS_DRAFT, NOTE_STATUS_PUBLISH
from .ownership import ensure_owner, require_owner_id
from .schemas import NoteCreate, NoteOut, NoteUpdate

logger = logging.getLogger(__name__)


def create_note(db: Session, body: NoteCreate) -> NoteOut:
    """Create a note and its initial sections in one transaction."""
    with transaction(db):
        n = store_notes.create(
            db,
            title=body.title,
            template_id=body.template_id,
            owner_id=body.owner_id,
            status=body.status,
            sections=body.sections,
        )
        note_id = n.id
    logger.info("note %s created by %s on template %s", note_id, body.owner_id, body.template_id)
    return store_notes.get(db, note_id)


def get_note(db: Session, note_id: str) -> NoteOut:
    return store_notes.get(db, note_id)


def list_notes(
    db: Session,
    status: Optional[str] = None,
    owner_id: Optional[str] = None,
    template_id: Optional[str] = None,
    q: Optional[str] = None,
) -> List[NoteOut]:
    if status and status not in NOTE_STATUSES:
        raise InvalidInput(f"status must be one of {', '.join(NOTE_STATUSES)}")
    return store_notes.list_notes(db, status=status, owner_id=owner_id, template_id=template_id, q=q)


def update_note(db: Session, note_id: str, owner_id: Optional[str], body: NoteUpdate) -> NoteOut:
    """Apply a partial update: new title and/or new content for existing sections."""
    owner_id = require_owner_id(owner_id)
    with transaction(db):
        ensure_owner(store_notes.get_owner_id(db, note_id), owner_id, "note")
        store_notes.update(db, note_id, title=body.title)
        if body.sections is not None:
            store_notes.replace_sections(db, note_id, body.sections)
    logger.info("note %s updated by %s", note_id, owner_id)
    return store_notes.get(db, note_id)


def _set_status(db: Session, note_id: str, owner_id: Optional[str], status: str) -> NoteOut:
    owner_id = require_owner_id(owner_id)
    with transaction(db):
        ensure_owner(store_notes.get_owner_id(db, note_id), owner_id, "note")
        store_notes.update_status(db, note_id, status)
    logger.info("note %s set to %s by %s", note_id, status, owner_id)
    return store_notes.get(db, note_id)


def publish_note(db: Session, note_id: str, owner_id: Optional[str]) -> NoteOut:
    return _set_status(db, note_id, owner_id, NOTE_STATUS_PUBLISH)


def unpublish_note(db: Session, note_id: str, owner_id: Optional[str]) -> NoteOut:
    return _set_status(db, note_id, owner_id, NOTE_STATUS_DRAFT)


def delete_note(db: Session, note_id: str, owner_id: Optional[str]) -> None:
    owner_id = require_owner_id(owner_id)
    with transaction(db):
        ensure_owner(store_notes.get_owner_id(db, note_id), owner_id, "note")
        store_notes.delete(db, note_id)
    logger.info("note %s deleted by %s", note_id, owner_id)
