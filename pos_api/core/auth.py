# pos_api/core/auth.py

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from pos_api.database import get_db
from pos_api.models.accounts import Account, AccountRole
from pos_api.core.jwt import decode_access_token

# Operators obtain tokens from the login route
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def get_current_account(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
):
    payload = decode_access_token(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    account_id = payload.get("sub")

    if account_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    account = db.query(Account).filter(Account.id == int(account_id)).first()

    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account not found",
        )

    return account


def require_roles(*roles: AccountRole):
    allowed = set(roles)

    def dependency(current_account: Account = Depends(get_current_account)):
        if current_account.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient privileges",
            )
        return current_account

    return dependency


get_manager = require_roles(AccountRole.MANAGER)
get_operator = require_roles(AccountRole.MANAGER, AccountRole.CASHIER)
