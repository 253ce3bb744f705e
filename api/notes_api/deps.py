from fastapi import Query
from typing import Optional

from .schemas import UUID_PATTERN


def owner_id_param(owner_id: Optional[str] = Query(None, alias="ownerId", pattern=UUID_PATTERN)) -> Optional[str]:
    """The acting account for owner-only endpoints.

    Left optional at the HTTP layer so that the use case, not FastAPI,
    decides what a missing ownerId means.
    """
    return owner_id
