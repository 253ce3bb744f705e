import logging
from typing import Tuple

from sqlalchemy.orm import Session

from . import store_accounts
from .db import transaction
from .schemas import AccountAuthIn, AccountOut

logger = logging.getLogger(__name__)


def split_name(name: str) -> Tuple[str, str]:
    """Split a provider display name on the first space: 'Ada Lovelace' -> ('Ada', 'Lovelace')."""
    first, _, last = name.strip().partition(" ")
    return first, last.strip()


def create_or_get_account(db: Session, body: AccountAuthIn) -> AccountOut:
    first_name, last_name = split_name(body.name)
    with transaction(db):
        out = store_accounts.upsert_oauth_account(
            db,
            email=body.email,
            first_name=first_name,
            last_name=last_name,
            provider=body.provider,
            provider_account_id=body.provider_account_id,
            thumbnail=body.thumbnail,
        )
    logger.info("sign-in for account %s via %s", out.id, body.provider)
    return out


def get_account(db: Session, account_id: str) -> AccountOut:
    return store_accounts.get_by_id(db, account_id)


def get_account_by_email(db: Session, email: str) -> AccountOut:
    return store_accounts.get_by_email(db, email)
