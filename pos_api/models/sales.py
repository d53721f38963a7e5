# models/sales.py

from sqlalchemy import CheckConstraint, Column, Integer, DateTime, ForeignKey, Numeric
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from pos_api.database import Base


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)

    total = Column(Numeric(10, 2), nullable=False)
    payment = Column(Numeric(10, 2), nullable=False)
    # payment - total; underpayment is stored as-is
    balance = Column(Numeric(10, 2), nullable=False)

    cashier_id = Column(Integer, ForeignKey("accounts.id"), nullable=True, index=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    items = relationship(
        "SaleItem",
        back_populates="sale",
        order_by="SaleItem.id",
    )

    __table_args__ = (
        CheckConstraint("total >= 0", name="ck_sale_total_non_negative"),
        CheckConstraint("payment >= 0", name="ck_sale_payment_non_negative"),
    )
