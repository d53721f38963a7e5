from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import SQLAlchemyError

from pos_api.database import get_db
from pos_api.models.accounts import Account
from pos_api.schemas.user import AccountCreate, AccountResponse, TokenResponse
from pos_api.core.auth import get_current_account, get_manager
from pos_api.core.hashing import hash_password, verify_password
from pos_api.core.jwt import create_access_token
from pos_api.core.rate_limiter import limiter
from pos_api.core.config import settings

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _create_account(db: Session, account_data: AccountCreate) -> Account:
    username = account_data.username.strip()

    if not username:
        raise HTTPException(status_code=400, detail="Username cannot be empty")

    if db.query(Account).filter(Account.username == username).first():
        raise HTTPException(status_code=409, detail="Username already exists")

    try:
        account = Account(
            username=username,
            password_hash=hash_password(account_data.password),
            role=account_data.role,
        )
        db.add(account)
        db.commit()
        db.refresh(account)

    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to create account")

    return account


# ---------------- LOGIN (TOKEN-BASED) ----------------
@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    if not form_data.username.strip():
        raise HTTPException(status_code=400, detail="Username is empty")

    account = db.query(Account).filter(Account.username == form_data.username.strip()).first()

    if not account or not verify_password(form_data.password, account.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token(account.id, account.role.value)

    return {
        "access_token": token,
        "token_type": "bearer"
    }


# ---------------- ACCOUNTS (MANAGER ONLY) ----------------
@router.post("/accounts", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_account(
    account_data: AccountCreate,
    db: Session = Depends(get_db),
    manager: Account = Depends(get_manager),
):
    return _create_account(db, account_data)


@router.get("/me", response_model=AccountResponse)
def me(current_account: Account = Depends(get_current_account)):
    return current_account


# ---------------- LOGOUT ----------------
@router.post("/logout")
def logout():
    return {"message": "Logged out successfully"}
