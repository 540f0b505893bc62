# app/routers/products.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.database import get_db
from app.models.products import Product
from app.schemas.product import (
    MessageResponse,
    ProductCreate,
    ProductCreated,
    ProductResponse,
    ProductUpdate,
)

logger = logging.getLogger("app.catalog")

router = APIRouter(
    prefix="/api/products",
    tags=["Products"],
)


@router.get("", response_model=list[ProductResponse])
def list_products(db: Session = Depends(get_db)):
    return db.query(Product).order_by(Product.id).all()


@router.post("", response_model=ProductCreated)
def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
):
    product = Product(
        name=product_data.name,
        price=product_data.price,
        unit=product_data.unit or settings.DEFAULT_UNIT,
    )

    db.add(product)
    db.commit()
    db.refresh(product)

    logger.info("Product %s created: %s", product.id, product.name)

    return {"message": "Product added", "product_id": product.id}


@router.put("/{product_id}", response_model=MessageResponse)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    db: Session = Depends(get_db),
):
    product = db.query(Product).filter(Product.id == product_id).first()

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    product.name = product_data.name
    product.price = product_data.price
    product.unit = product_data.unit or settings.DEFAULT_UNIT

    db.commit()

    return {"message": "Product updated"}


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
):
    try:
        result = db.execute(delete(Product).where(Product.id == product_id))
        db.commit()
    except IntegrityError as exc:
        # Referenced by inventory rows or sale items
        db.rollback()
        logger.warning("Product %s delete rejected: %s", product_id, exc.orig)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc.orig),
        )

    if not result.rowcount:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    logger.info("Product %s deleted", product_id)

    return {"message": "Product deleted"}
