from typing import Iterable, List, Optional

from sqlalchemy import exists, func
from sqlalchemy.orm import Session, selectinload

from .errors import ConstraintViolation, NotFound, flush, integrity_errors
from .models import Account, Field, Note, Template, utcnow
from .schemas import FieldIn, FieldOut, OwnerOut, TemplateOut


def owner_out(a: Account) -> OwnerOut:
    return OwnerOut(id=a.id, first_name=a.first_name, last_name=a.last_name, thumbnail=a.thumbnail)


def _to_out(t: Template, owner: Account, is_used: bool) -> TemplateOut:
    return TemplateOut(
        id=t.id,
        name=t.name,
        owner_id=t.owner_id,
        owner=owner_out(owner),
        fields=[FieldOut(id=f.id, label=f.label, order=f.order, is_required=bool(f.is_required)) for f in t.fields],
        is_used=bool(is_used),
        created_at=t.created_at,
        updated_at=t.updated_at,
    )


def _view_query(db: Session):
    # isUsed is an EXISTS probe evaluated per row, never a count
    is_used = exists().where(Note.template_id == Template.id).correlate(Template).label("is_used")
    return (
        db.query(Template, Account, is_used)
        .join(Account, Account.id == Template.owner_id)
        .options(selectinload(Template.fields))
    )


def create(db: Session, *, name: str, owner_id: str) -> Template:
    t = Template(name=name, owner_id=owner_id)
    db.add(t)
    flush(db, "Owner account does not exist")
    return t


def get(db: Session, template_id: str) -> TemplateOut:
    row = _view_query(db).filter(Template.id == template_id).first()
    if not row:
        raise NotFound("Template not found")
    t, owner, is_used = row
    return _to_out(t, owner, is_used)


def get_owner_id(db: Session, template_id: str) -> str:
    row = db.query(Template.owner_id).filter(Template.id == template_id).first()
    if not row:
        raise NotFound("Template not found")
    return row[0]


def update(db: Session, template_id: str, *, name: Optional[str] = None) -> Template:
    """Rename a template. The owner and id never change."""
    t = db.get(Template, template_id)
    if not t:
        raise NotFound("Template not found")
    if name is not None:
        t.name = name
    flush(db)
    return t


def delete(db: Session, template_id: str) -> None:
    t = db.get(Template, template_id)
    if not t:
        raise NotFound("Template not found")
    db.delete(t)
    # notes.template_id is ON DELETE RESTRICT; the database refuses while notes exist
    flush(db, "Template is in use by one or more notes")


def replace_fields(db: Session, template_id: str, fields: Iterable[FieldIn]) -> None:
    """Swap the template's field list for ``fields`` wholesale.

    Existing fields are deleted and the new ones inserted with exactly the
    order and required flag given; nothing is merged. Fails with
    ConstraintViolation when the template does not exist, when two fields
    share an order, or when notes still hold sections for the old fields.
    """
    fields = list(fields)
    t = db.get(Template, template_id)
    if t is None:
        raise ConstraintViolation("Template does not exist")
    orders = [f.order for f in fields]
    if len(set(orders)) != len(orders):
        raise ConstraintViolation("Field order values must be unique within a template")

    with integrity_errors("Template is in use; its fields are referenced by notes"):
        db.query(Field).filter(Field.template_id == template_id).delete(synchronize_session=False)
    for f in fields:
        db.add(Field(template_id=template_id, label=f.label, order=f.order, is_required=bool(f.is_required)))
    t.updated_at = utcnow()
    flush(db)
    db.expire(t, ["fields"])


def list_templates(db: Session, *, owner_id: Optional[str] = None, q: Optional[str] = None) -> List[TemplateOut]:
    query = _view_query(db)
    if owner_id:
        query = query.filter(Template.owner_id == owner_id)
    if q:
        query = query.filter(func.lower(Template.name).contains(q.lower(), autoescape=True))
    rows = query.order_by(Template.created_at.desc(), Template.id.desc()).all()
    return [_to_out(t, owner, is_used) for t, owner, is_used in rows]
