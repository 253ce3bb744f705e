from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from . import usecase_templates
from .db import get_db
from .deps import owner_id_param
from .schemas import DeletedOut, TemplateCreate, TemplateOut, TemplateUpdate, UUID_PATTERN


router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.get("", response_model=List[TemplateOut])
def list_templates(
    db: Session = Depends(get_db),
    owner_id: Optional[str] = Query(None, alias="ownerId", pattern=UUID_PATTERN),
    q: Optional[str] = Query(None),
):
    return usecase_templates.list_templates(db, owner_id=owner_id, q=q)


@router.post("", response_model=TemplateOut)
def create_template(body: TemplateCreate, db: Session = Depends(get_db)):
    return usecase_templates.create_template(db, body)


@router.get("/{template_id}", response_model=TemplateOut)
def get_template(template_id: str = Path(..., pattern=UUID_PATTERN), db: Session = Depends(get_db)):
    return usecase_templates.get_template(db, template_id)


@router.put("/{template_id}", response_model=TemplateOut)
def update_template(
    body: TemplateUpdate,
    template_id: str = Path(..., pattern=UUID_PATTERN),
    owner_id: Optional[str] = Depends(owner_id_param),
    db: Session = Depends(get_db),
):
    return usecase_templates.update_template(db, template_id, owner_id, body)


@router.delete("/{template_id}", response_model=DeletedOut)
def delete_template(
    template_id: str = Path(..., pattern=UUID_PATTERN),
    owner_id: Optional[str] = Depends(owner_id_param),
    db: Session = Depends(get_db),
):
    usecase_templates.delete_template(db, template_id, owner_id)
    return DeletedOut(deleted=template_id)
