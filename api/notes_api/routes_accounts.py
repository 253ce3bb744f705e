from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from . import usecase_accounts
from .db import get_db
from .schemas import AccountAuthIn, AccountOut, UUID_PATTERN

router = APIRouter(prefix="/api/accounts", tags=["accounts"])


@router.post("/auth", response_model=AccountOut)
def create_or_get_account(body: AccountAuthIn, db: Session = Depends(get_db)):
    """Called after an OAuth sign-in; creates the account on first login."""
    return usecase_accounts.create_or_get_account(db, body)


# Must stay above "/{account_id}" so "by-email" is not taken for an id
@router.get("/by-email", response_model=AccountOut)
def get_account_by_email(email: str = Query(..., min_length=3), db: Session = Depends(get_db)):
    return usecase_accounts.get_account_by_email(db, email)


@router.get("/{account_id}", response_model=AccountOut)
def get_account(account_id: str = Path(..., pattern=UUID_PATTERN), db: Session = Depends(get_db)):
    return usecase_accounts.get_account(db, account_id)
