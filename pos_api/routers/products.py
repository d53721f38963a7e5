# pos_api/routers/products.py

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from pos_api.database import get_db
from pos_api.core.auth import get_manager, get_operator
from pos_api.models.products import Product
from pos_api.models.sale_items import SaleItem
from pos_api.services import catalog
from pos_api.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
)

router = APIRouter(
    prefix="/products",
    tags=["Products"],
)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
    manager=Depends(get_manager),
):
    if db.query(Product).filter(Product.id == product_data.id).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Item ID already exists",
        )

    # Product names are unique across the catalog
    name = product_data.name
    if db.query(Product).filter(Product.name == name).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Product with this name already exists",
        )

    product = Product(
        id=product_data.id,
        name=name,
        category=product_data.category,
        quantity=product_data.quantity,
        price=product_data.price,
    )

    db.add(product)
    db.commit()
    db.refresh(product)

    return product


@router.get("", response_model=list[ProductResponse])
def list_products(
    db: Session = Depends(get_db),
    current_account=Depends(get_operator),
):
    return catalog.list_products(db)


@router.get("/search", response_model=list[ProductResponse])
def search_products(
    q: str = Query(..., description="Matches name, category or item id"),
    db: Session = Depends(get_db),
    current_account=Depends(get_operator),
):
    return catalog.search_products(db, q)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_account=Depends(get_operator),
):
    return catalog.get_product(db, product_id)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    db: Session = Depends(get_db),
    manager=Depends(get_manager),
):
    product = catalog.get_product(db, product_id)

    if product_data.name is not None:
        name = product_data.name
        clash = (
            db.query(Product)
            .filter(Product.name == name, Product.id != product_id)
            .first()
        )
        if clash:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Product with this name already exists",
            )
        product.name = name

    if product_data.category is not None:
        product.category = product_data.category

    if product_data.quantity is not None:
        product.quantity = product_data.quantity

    if product_data.price is not None:
        product.price = product_data.price

    db.commit()
    db.refresh(product)

    return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    manager=Depends(get_manager),
):
    product = catalog.get_product(db, product_id)

    # Sold products stay so historical sale items keep their reference
    if db.query(SaleItem.id).filter(SaleItem.product_id == product_id).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Product has recorded sales and cannot be deleted",
        )

    db.delete(product)
    db.commit()

    return None
