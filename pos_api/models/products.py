# pos_api/models/products.py

from sqlalchemy import CheckConstraint, Column, Integer, String, Numeric, DateTime
from sqlalchemy.sql import func

from pos_api.database import Base


class Product(Base):
    __tablename__ = "products"

    # Item ids are assigned by the store, not generated
    id = Column(Integer, primary_key=True, autoincrement=False, index=True)
    name = Column(String, nullable=False, unique=True)
    category = Column(String, nullable=False, default="")
    quantity = Column(Integer, nullable=False, default=0)
    price = Column(Numeric(10, 2), nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("id > 0", name="ck_product_id_positive"),
        CheckConstraint("quantity >= 0", name="ck_product_quantity_non_negative"),
        CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
    )
