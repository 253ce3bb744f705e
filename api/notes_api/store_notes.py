from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from .errors import ConstraintViolation, NotFound, flush
from .models import Account, Field, Note, Section, Template, NOTE_STATUS_DRAFT, utcnow
from .schemas import NoteOut, SectionIn, SectionOut, SectionUpdate
from .store_templates import owner_out


def _view_query(db: Session):
    return (
        db.query(Note, Template.name, Account)
        .join(Template, Template.id == Note.template_id)
        .join(Account, Account.id == Note.owner_id)
    )


def _sections_by_note(db: Session, note_ids: List[str]) -> Dict[str, List[SectionOut]]:
    """Sections of the given notes with their field label, in template field order."""
    out: Dict[str, List[SectionOut]] = defaultdict(list)
    if not note_ids:
        return out
    rows = (
        db.query(Section, Field)
        .join(Field, Field.id == Section.field_id)
        .filter(Section.note_id.in_(note_ids))
        .order_by(Section.note_id.asc(), Field.order.asc())
        .all()
    )
    for s, f in rows:
        out[s.note_id].append(SectionOut(
            id=s.id,
            field_id=f.id,
            field_label=f.label,
            field_order=f.order,
            is_required=bool(f.is_required),
            content=s.content or "",
        ))
    return out


def _to_out(n: Note, template_name: str, owner: Account, sections: List[SectionOut]) -> NoteOut:
    return NoteOut(
        id=n.id,
        title=n.title,
        template_id=n.template_id,
        template_name=template_name,
        owner_id=n.owner_id,
        owner=owner_out(owner),
        status=n.status,
        sections=sections,
        created_at=n.created_at,
        updated_at=n.updated_at,
    )


def create(
    db: Session,
    *,
    title: str,
    template_id: str,
    owner_id: str,
    status: Optional[str] = None,
    sections: Iterable[SectionIn] = (),
) -> Note:
    """Insert a note and the sections it starts with.

    Status defaults to Draft. The template and owner must exist and the
    status must pass the notes.status CHECK constraint; otherwise
    ConstraintViolation. Each section must point at a distinct field of the
    note's template.
    """
    n = Note(title=title, template_id=template_id, owner_id=owner_id, status=status or NOTE_STATUS_DRAFT)
    db.add(n)
    flush(db)

    sections = list(sections)
    if sections:
        field_ids = {fid for (fid,) in db.query(Field.id).filter(Field.template_id == template_id).all()}
        seen = set()
        for s in sections:
            if s.field_id not in field_ids:
                raise ConstraintViolation(f"Field {s.field_id} does not belong to template {template_id}")
            if s.field_id in seen:
                raise ConstraintViolation(f"More than one section for field {s.field_id}")
            seen.add(s.field_id)
            db.add(Section(note_id=n.id, field_id=s.field_id, content=s.content or ""))
        flush(db)
    return n


def get(db: Session, note_id: str) -> NoteOut:
    row = _view_query(db).filter(Note.id == note_id).first()
    if not row:
        raise NotFound("Note not found")
    n, template_name, owner = row
    return _to_out(n, template_name, owner, _sections_by_note(db, [n.id])[n.id])


def get_owner_id(db: Session, note_id: str) -> str:
    row = db.query(Note.owner_id).filter(Note.id == note_id).first()
    if not row:
        raise NotFound("Note not found")
    return row[0]


def update(db: Session, note_id: str, *, title: Optional[str] = None) -> Note:
    n = db.get(Note, note_id)
    if not n:
        raise NotFound("Note not found")
    if title is not None:
        n.title = title
    flush(db)
    return n


def update_status(db: Session, note_id: str, status: str) -> Note:
    # Draft -> Publish and Publish -> Draft are both plain writes
    n = db.get(Note, note_id)
    if not n:
        raise NotFound("Note not found")
    n.status = status
    flush(db, f"Invalid note status: {status}")
    return n


def delete(db: Session, note_id: str) -> None:
    n = db.get(Note, note_id)
    if not n:
        raise NotFound("Note not found")
    db.delete(n)
    flush(db)


def replace_sections(db: Session, note_id: str, sections: Iterable[SectionUpdate]) -> None:
    """Overwrite the content of existing sections, matched by section id.

    Field and note bindings never change here and no section is inserted.
    Any id that is not a section of this note is rejected with
    ConstraintViolation before anything is written.
    """
    sections = list(sections)
    n = db.get(Note, note_id)
    if not n:
        raise NotFound("Note not found")
    existing = {s.id: s for s in db.query(Section).filter(Section.note_id == note_id).all()}
    unknown = [s.id for s in sections if s.id not in existing]
    if unknown:
        raise ConstraintViolation(f"Unknown section id(s) for note {note_id}: {', '.join(unknown)}")
    for s in sections:
        existing[s.id].content = s.content or ""
    if sections:
        n.updated_at = utcnow()
    flush(db)


def list_notes(
    db: Session,
    *,
    status: Optional[str] = None,
    owner_id: Optional[str] = None,
    template_id: Optional[str] = None,
    q: Optional[str] = None,
) -> List[NoteOut]:
    query = _view_query(db)
    if status:
        query = query.filter(Note.status == status)
    if owner_id:
        query = query.filter(Note.owner_id == owner_id)
    if template_id:
        query = query.filter(Note.template_id == template_id)
    if q:
        query = query.filter(func.lower(Note.title).contains(q.lower(), autoescape=True))
    rows = query.order_by(Note.created_at.desc(), Note.id.desc()).all()
    sections = _sections_by_note(db, [n.id for n, _, _ in rows])
    return [_to_out(n, template_name, owner, sections[n.id]) for n, template_name, owner in rows]
