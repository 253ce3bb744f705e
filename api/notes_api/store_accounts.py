from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from .errors import NotFound, flush
from .models import Account, utcnow
from .schemas import AccountOut


def _to_out(a: Account) -> AccountOut:
    full_name = f"{a.first_name} {a.last_name}".strip()
    return AccountOut(
        id=a.id,
        email=a.email,
        first_name=a.first_name,
        last_name=a.last_name,
        full_name=full_name,
        thumbnail=a.thumbnail,
        is_active=bool(a.is_active),
        last_login_at=a.last_login_at,
        created_at=a.created_at,
        updated_at=a.updated_at,
    )


def get_by_id(db: Session, account_id: str) -> AccountOut:
    a = db.query(Account).filter(Account.id == account_id).first()
    if not a:
        raise NotFound("Account not found")
    return _to_out(a)


def get_by_email(db: Session, email: str) -> AccountOut:
    a = db.query(Account).filter(Account.email == email).first()
    if not a:
        raise NotFound("Account not found")
    return _to_out(a)


def upsert_oauth_account(
    db: Session,
    *,
    email: str,
    first_name: str,
    last_name: str,
    provider: str,
    provider_account_id: str,
    thumbnail: Optional[str] = None,
) -> AccountOut:
    """Insert or refresh the account for an OAuth identity.

    The identity is (provider, provider_account_id); the e-mail, names and
    avatar follow whatever the provider reported last. Every call counts as a
    sign-in, so last_login_at moves to now and the account is active again.
    An e-mail already held by a different identity is a ConstraintViolation.
    """
    now = utcnow()
    a = (
        db.query(Account)
        .filter(Account.provider == provider, Account.provider_account_id == provider_account_id)
        .first()
    )
    if a is None:
        a = Account(provider=provider, provider_account_id=provider_account_id)
        db.add(a)
    a.email = email
    a.first_name = first_name
    a.last_name = last_name
    a.thumbnail = thumbnail
    a.is_active = True
    a.last_login_at = now
    flush(db, "Email is already registered to another account")
    db.refresh(a)
    return _to_out(a)


def deactivate_by_last_login_before(db: Session, threshold: datetime) -> int:
    """Mark active accounts whose last sign-in is older than ``threshold`` inactive.

    One conditional UPDATE; returns the number of rows it changed, so a
    repeated run with the same threshold returns 0. Accounts that never
    signed in (NULL last_login_at) are left alone.
    """
    count = (
        db.query(Account)
        .filter(Account.is_active.is_(True), Account.last_login_at < threshold)
        .update({Account.is_active: False, Account.updated_at: utcnow()}, synchronize_session=False)
    )
    return int(count or 0)
