from pydantic import BaseModel, EmailStr, Field, StringConstraints
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from typing import Annotated, List, Optional
from datetime import datetime

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"

IdStr = Annotated[str, StringConstraints(pattern=UUID_PATTERN)]


class ApiModel(BaseModel):
    """Base for wire models: snake_case in Python, camelCase in JSON.

    Either spelling is accepted on input.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# --- Accounts ---
class AccountAuthIn(ApiModel):
    email: EmailStr
    name: str = Field(min_length=1, max_length=201)
    provider: str = Field(min_length=1, max_length=32)
    provider_account_id: str = Field(min_length=1, max_length=255)
    thumbnail: Optional[str] = None


class AccountOut(ApiModel):
    id: str
    email: EmailStr
    first_name: str
    last_name: str
    full_name: str
    thumbnail: Optional[str] = None
    is_active: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class OwnerOut(ApiModel):
    id: str
    first_name: str
    last_name: str
    thumbnail: Optional[str] = None


# --- Templates ---
class FieldIn(ApiModel):
    label: str = Field(min_length=1, max_length=100)
    order: int = Field(ge=1)
    is_required: bool = False


class FieldOut(ApiModel):
    id: str
    label: str
    order: int
    is_required: bool


class TemplateCreate(ApiModel):
    name: str = Field(min_length=1, max_length=100)
    owner_id: IdStr
    fields: List[FieldIn] = Field(default_factory=list)


class TemplateUpdate(ApiModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    fields: Optional[List[FieldIn]] = None


class TemplateOut(ApiModel):
    id: str
    name: str
    owner_id: str
    owner: OwnerOut
    fields: List[FieldOut]
    is_used: bool
    created_at: datetime
    updated_at: datetime


# --- Notes ---
class SectionIn(ApiModel):
    field_id: IdStr
    content: str = ""


class SectionUpdate(ApiModel):
    id: IdStr
    content: str = ""


class SectionOut(ApiModel):
    id: str
    field_id: str
    field_label: str
    field_order: int
    is_required: bool
    content: str


class NoteCreate(ApiModel):
    title: str = Field(min_length=1, max_length=100)
    template_id: IdStr
    owner_id: IdStr
    # Not narrowed here: the notes.status CHECK constraint is the authority
    status: Optional[str] = None
    sections: List[SectionIn] = Field(default_factory=list)


class NoteUpdate(ApiModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    sections: Optional[List[SectionUpdate]] = None


class NoteOut(ApiModel):
    id: str
    title: str
    template_id: str
    template_name: str
    owner_id: str
    owner: OwnerOut
    status: str
    sections: List[SectionOut]
    created_at: datetime
    updated_at: datetime


class DeletedOut(ApiModel):
    deleted: str
