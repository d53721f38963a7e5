# pos_api/services/catalog.py

from sqlalchemy import String, cast, or_
from sqlalchemy.orm import Session

from pos_api.core.exceptions import NotFoundError, ValidationError
from pos_api.models.products import Product


def get_product(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()

    if product is None:
        raise NotFoundError("product", product_id)

    return product


def list_products(db: Session):
    return db.query(Product).order_by(Product.id).all()


def search_products(db: Session, keyword: str):
    if keyword is None or not keyword.strip():
        raise ValidationError("Search keyword cannot be empty")

    pattern = f"%{keyword.strip()}%"

    return (
        db.query(Product)
        .filter(
            or_(
                Product.name.ilike(pattern),
                Product.category.ilike(pattern),
                cast(Product.id, String).like(pattern),
            )
        )
        .order_by(Product.id)
        .all()
    )
