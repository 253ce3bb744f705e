from datetime import datetime, timezone
import uuid

from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, UniqueConstraint, CheckConstraint, Integer, Text, Index
from sqlalchemy.orm import relationship
from .db import Base


NOTE_STATUS_DRAFT = "Draft"
NOTE_STATUS_PUBLISH = "Publish"
NOTE_STATUSES = (NOTE_STATUS_DRAFT, NOTE_STATUS_PUBLISH)


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(Base):
    """
    Account model for owner identities created through OAuth sign-in.

    Attributes:
        id (str): UUID primary key.
        email (str): Unique e-mail address.
        first_name (str): Given name, used as the owner display name.
        last_name (str): Family name.
        is_active (bool): False once the deactivation job has run for this account.
        provider (str): OAuth provider key, e.g. "google".
        provider_account_id (str): Subject id at the provider; unique together with provider.
        thumbnail (str): Optional avatar URL.
        last_login_at (datetime): Last successful sign-in, NULL if never recorded.
        created_at (datetime): Timestamp of account creation.
        updated_at (datetime): Timestamp of last change.
    """
    __tablename__ = "accounts"
    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False, default="")
    is_active = Column(Boolean, default=True, nullable=False)
    provider = Column(String(32), nullable=False)
    provider_account_id = Column(String(255), nullable=False)
    thumbnail = Column(Text, nullable=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("provider", "provider_account_id", name="uq_accounts_provider_account"),
        Index("ix_accounts_active_last_login", "is_active", "last_login_at"),
    )


# --- Templates ---
class Template(Base):
    __tablename__ = "templates"
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    owner_id = Column(String(36), ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    fields = relationship(
        "Field",
        back_populates="template",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Field.order",
    )


class Field(Base):
    __tablename__ = "fields"
    id = Column(String(36), primary_key=True, default=new_id)
    template_id = Column(String(36), ForeignKey("templates.id", ondelete="CASCADE"), nullable=False, index=True)
    label = Column(String(100), nullable=False)
    order = Column(Integer, nullable=False)  # 1-based, caller supplied
    is_required = Column(Boolean, nullable=False, default=False)

    template = relationship("Template", back_populates="fields")

    __table_args__ = (
        UniqueConstraint("template_id", "order", name="uq_fields_template_order"),
    )


# --- Notes ---
class Note(Base):
    __tablename__ = "notes"
    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(100), nullable=False)
    # template_id and owner_id are never reassigned after insert
    template_id = Column(String(36), ForeignKey("templates.id", ondelete="RESTRICT"), nullable=False, index=True)
    owner_id = Column(String(36), ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False, index=True)
    status = Column(String(16), nullable=False, default=NOTE_STATUS_DRAFT)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    sections = relationship(
        "Section",
        back_populates="note",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("status IN ('Draft', 'Publish')", name="ck_notes_status"),
        Index("ix_notes_status", "status"),
    )


class Section(Base):
    __tablename__ = "sections"
    id = Column(String(36), primary_key=True, default=new_id)
    note_id = Column(String(36), ForeignKey("notes.id", ondelete="CASCADE"), nullable=False, index=True)
    field_id = Column(String(36), ForeignKey("fields.id", ondelete="RESTRICT"), nullable=False, index=True)
    content = Column(Text, nullable=False, default="")

    note = relationship("Note", back_populates="sections")

    __table_args__ = (
        UniqueConstraint("note_id", "field_id", name="uq_sections_note_field"),
    )
