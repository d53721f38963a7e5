# pos_api/models/accounts.py

import enum

from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.sql import func

from pos_api.database import Base


class AccountRole(str, enum.Enum):
    MANAGER = "manager"
    CASHIER = "cashier"


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)

    role = Column(
        Enum(AccountRole, name="account_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=AccountRole.CASHIER,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
