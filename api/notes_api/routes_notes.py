from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from . import usecase_notes
from .db import get_db
from .deps import owner_id_param
from .schemas import DeletedOut, NoteCreate, NoteOut, NoteUpdate, UUID_PATTERN


router = APIRouter(prefix="/api/notes", tags=["notes"])


@router.get("", response_model=List[NoteOut])
def list_notes(
    db: Session = Depends(get_db),
    status: Optional[str] = Query(None),
    owner_id: Optional[str] = Query(None, alias="ownerId", pattern=UUID_PATTERN),
    template_id: Optional[str] = Query(None, alias="templateId", pattern=UUID_PATTERN),
    q: Optional[str] = Query(None),
):
    """List notes; every filter is optional and they combine with AND.

    Each item carries its sections, same as the single-note view.
    """
    return usecase_notes.list_notes(db, status=status, owner_id=owner_id, template_id=template_id, q=q)


@router.post("", response_model=NoteOut)
def create_note(body: NoteCreate, db: Session = Depends(get_db)):
    return usecase_notes.create_note(db, body)


@router.get("/{note_id}", response_model=NoteOut)
def get_note(note_id: str = Path(..., pattern=UUID_PATTERN), db: Session = Depends(get_db)):
    return usecase_notes.get_note(db, note_id)


@router.put("/{note_id}", response_model=NoteOut)
def update_note(
    body: NoteUpdate,
    note_id: str = Path(..., pattern=UUID_PATTERN),
    owner_id: Optional[str] = Depends(owner_id_param),
    db: Session = Depends(get_db),
):
    return usecase_notes.update_note(db, note_id, owner_id, body)


@router.delete("/{note_id}", response_model=DeletedOut)
def delete_note(
    note_id: str = Path(..., pattern=UUID_PATTERN),
    owner_id: Optional[str] = Depends(owner_id_param),
    db: Session = Depends(get_db),
):
    usecase_notes.delete_note(db, note_id, owner_id)
    return DeletedOut(deleted=note_id)


@router.post("/{note_id}/publish", response_model=NoteOut)
def publish_note(
    note_id: str = Path(..., pattern=UUID_PATTERN),
    owner_id: Optional[str] = Depends(owner_id_param),
    db: Session = Depends(get_db),
):
    return usecase_notes.publish_note(db, note_id, owner_id)


@router.post("/{note_id}/unpublish", response_model=NoteOut)
def unpublish_note(
    note_id: str = Path(..., pattern=UUID_PATTERN),
    owner_id: Optional[str] = Depends(owner_id_param),
    db: Session = Depends(get_db),
):
    return usecase_notes.unpublish_note(db, note_id, owner_id)
