"""Admin routes for catalog and offers management."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from pydantic import ValidationError
from typing import List, Optional, Dict, Any
from pharmanature.data.database.connection import get_db
from pharmanature.data.database.product_model import Product, Category
from pharmanature.data.database.product_schema import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    CategoryCreate,
    CategoryResponse,
)
from pharmanature.data.database.offers_model import get_offers_record
from pharmanature.data.database.offers_schema import OffersConfig
from pharmanature.utils.offers import resolve_config

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post(
    "/products/",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Create a new product in the catalog"
)
def create_product(
    product: ProductCreate,
    db: Session = Depends(get_db)
):
    """Create a new product."""
    if db.get(Product, product.id) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Product with ID {product.id} already exists"
        )

    db_product = Product(**product.model_dump())
    db.add(db_product)
    db.commit()
    db.refresh(db_product)

    return db_product


@router.get(
    "/products/",
    response_model=List[ProductResponse],
    summary="Get all products",
    description="Retrieve all products with optional filtering"
)
def get_products(
    skip: int = 0,
    limit: int = 100,
    category: Optional[str] = None,
    brand: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """Get all products with optional filters."""
    query = db.query(Product)

    if category:
        query = query.filter(Product.category == category)
    if brand:
        query = query.filter(Product.brand == brand)

    return query.order_by(Product.id).offset(skip).limit(limit).all()


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    summary="Get product by ID",
    description="Retrieve a specific product by its ID"
)
def get_product(
    product_id: int,
    db: Session = Depends(get_db)
):
    """Get a product by ID."""
    product = db.get(Product, product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with ID {product_id} not found"
        )
    return product


@router.put(
    "/products/{product_id}",
    response_model=ProductResponse,
    summary="Update a product",
    description="Update an existing product by ID"
)
def update_product(
    product_id: int,
    product_update: ProductUpdate,
    db: Session = Depends(get_db)
):
    """Update a product."""
    db_product = db.get(Product, product_id)
    if not db_product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with ID {product_id} not found"
        )

    # Update only provided fields
    update_data = product_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(db_product, field, value)

    db.commit()
    db.refresh(db_product)

    return db_product


@router.patch(
    "/products/{product_id}",
    response_model=ProductResponse,
    summary="Partially update a product",
    description="Partially update an existing product by ID (alias for PUT)"
)
def patch_product(
    product_id: int,
    product_update: ProductUpdate,
    db: Session = Depends(get_db)
):
    """Partially update a product (same as PUT)."""
    return update_product(product_id, product_update, db)


@router.post(
    "/categories/",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category"
)
def create_category(
    category: CategoryCreate,
    db: Session = Depends(get_db)
):
    """Create a category. Names are unique."""
    if db.get(Category, category.name) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Category '{category.name}' already exists"
        )

    db_category = Category(**category.model_dump())
    db.add(db_category)
    db.commit()
    db.refresh(db_category)

    return db_category


@router.get("/categories/", response_model=List[CategoryResponse], summary="Get all categories")
def get_categories(db: Session = Depends(get_db)):
    return db.query(Category).order_by(Category.name).all()


@router.get(
    "/offers-config",
    response_model=Dict[str, Any],
    summary="Get the stored offers configuration",
    description="Raw stored document, which may leave fields out"
)
def get_stored_offers_config(db: Session = Depends(get_db)):
    return get_offers_record(db).document or {}


@router.put(
    "/offers-config",
    response_model=OffersConfig,
    summary="Replace the offers configuration",
    description="Stores the given document as is and returns it resolved against the defaults"
)
def put_offers_config(
    document: Dict[str, Any],
    db: Session = Depends(get_db)
):
    """Replace the stored offers document."""
    try:
        resolved = resolve_config(document)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False)
        )

    record = get_offers_record(db)
    record.document = document
    db.commit()

    return resolved
