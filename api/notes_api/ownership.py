"""Owner-only mutation rule for notes and templates."""
from typing import Optional

from .errors import Forbidden, InvalidInput


def require_owner_id(owner_id: Optional[str]) -> str:
    """Reject a mutating request that does not say who is acting.

    Called before any store access so a missing ownerId is always
    InvalidInput, whether or not the resource exists.
    """
    if not owner_id:
        raise InvalidInput("ownerId is required")
    return owner_id


def ensure_owner(stored_owner_id: str, owner_id: str, kind: str) -> None:
    if stored_owner_id != owner_id:
        raise Forbidden(f"Only the owner may modify this {kind}")
