import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from . import store_templates
from .db import transaction
from .ownership import ensure_owner, require_owner_id
from .schemas import TemplateCreate, TemplateOut, TemplateUpdate

logger = logging.getLogger(__name__)


def create_template(db: Session, body: TemplateCreate) -> TemplateOut:
    """Create a template together with its fields, all or nothing."""
    with transaction(db):
        t = store_templates.create(db, name=body.name, owner_id=body.owner_id)
        store_templates.replace_fields(db, t.id, body.fields)
        template_id = t.id
    logger.info("template %s created by %s with %d fields", template_id, body.owner_id, len(body.fields))
    return store_templates.get(db, template_id)


def get_template(db: Session, template_id: str) -> TemplateOut:
    return store_templates.get(db, template_id)


def list_templates(db: Session, owner_id: Optional[str] = None, q: Optional[str] = None) -> List[TemplateOut]:
    return store_templates.list_templates(db, owner_id=owner_id, q=q)


def update_template(db: Session, template_id: str, owner_id: Optional[str], body: TemplateUpdate) -> TemplateOut:
    """Rename and/or replace the fields of a template owned by ``owner_id``.

    A ``fields`` list, when given, replaces the current fields wholesale in
    the same transaction as the rename.
    """
    owner_id = require_owner_id(owner_id)
    with transaction(db):
        ensure_owner(store_templates.get_owner_id(db, template_id), owner_id, "template")
        store_templates.update(db, template_id, name=body.name)
        if body.fields is not None:
            store_templates.replace_fields(db, template_id, body.fields)
    logger.info("template %s updated by %s", template_id, owner_id)
    return store_templates.get(db, template_id)


def delete_template(db: Session, template_id: str, owner_id: Optional[str]) -> None:
    owner_id = require_owner_id(owner_id)
    with transaction(db):
        ensure_owner(store_templates.get_owner_id(db, template_id), owner_id, "template")
        store_templates.delete(db, template_id)
    logger.info("template %s deleted by %s", template_id, owner_id)
