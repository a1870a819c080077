"""Storefront routes for browsing, cart, offers and checkout."""
import hashlib
import logging
from fastapi import APIRouter, HTTPException, Request, Depends, status, Query
from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import Optional, List
from pydantic import BaseModel, Field
from pharmanature.config import settings
from pharmanature.data.database.connection import get_db
from pharmanature.data.database.order_models import Order, OrderItem
from pharmanature.data.database.product_model import Product, Category
from pharmanature.data.database.product_schema import ProductResponse, CategoryResponse
from pharmanature.data.database.offers_model import get_offers_record
from pharmanature.data.database.offers_schema import OffersConfig
from pharmanature.data.database.checkout_schema import CheckoutRequest, OrderResponse, OrderItemResponse
from pharmanature.utils.cart import Cart, CartManager, format_amount
from pharmanature.utils.offers import resolve_config, select_grid_products, select_deal_of_the_day

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])


def get_client_ip(request: Request) -> str:
    """
    Extract client IP address from request.
    Handles proxies and forwarded headers.
    """
    # X-Forwarded-For can contain multiple IPs, take the first one
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    if request.client:
        return request.client.host

    return "unknown"


def generate_session_id(ip_address: str) -> str:
    """
    Generate a consistent session_id from IP address.

    Args:
        ip_address: Client IP address

    Returns:
        Session ID based on IP address
    """
    hash_obj = hashlib.md5(ip_address.encode())
    return f"session_{hash_obj.hexdigest()[:16]}"


def get_session_id(request: Request) -> str:
    return generate_session_id(get_client_ip(request))


def get_cart_manager(request: Request) -> CartManager:
    return request.app.state.cart_manager


def get_session_cart(
    session_id: str = Depends(get_session_id),
    cart_manager: CartManager = Depends(get_cart_manager)
) -> Cart:
    """Dependency returning the cart owned by the caller's session."""
    return cart_manager.get_cart(session_id)


def get_existing_cart(
    session_id: str = Depends(get_session_id),
    cart_manager: CartManager = Depends(get_cart_manager)
) -> Cart:
    """Like get_session_cart, but a session without a cart gets an unstored empty one."""
    return cart_manager.peek_cart(session_id)


# Catalog endpoints
class ProductListResponse(BaseModel):
    """Product list response model."""
    products: List[ProductResponse]
    total: int
    page: int
    page_size: int


@router.get("/products", response_model=ProductListResponse, summary="Get products with search and filters")
def get_products(
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None, description="Search in product name, brand or description"),
    category: Optional[str] = Query(None, description="Filter by category"),
    brand: Optional[str] = Query(None, description="Filter by brand"),
    min_price: Optional[float] = Query(None, ge=0, description="Minimum price filter"),
    max_price: Optional[float] = Query(None, ge=0, description="Maximum price filter"),
    promo: Optional[bool] = Query(None, description="Filter by promotion flag"),
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(20, ge=1, le=100, description="Number of items per page")
):
    """
    Get catalog products with search and filtering.

    Results are ordered by product id and paginated.
    """
    query = db.query(Product)

    if search:
        search_term = f"%{search.lower()}%"
        query = query.filter(
            or_(
                Product.name.ilike(search_term),
                Product.brand.ilike(search_term),
                Product.description.ilike(search_term)
            )
        )

    if category:
        query = query.filter(Product.category == category)
    if brand:
        query = query.filter(Product.brand == brand)
    if min_price is not None:
        query = query.filter(Product.price >= min_price)
    if max_price is not None:
        query = query.filter(Product.price <= max_price)
    if promo is not None:
        query = query.filter(Product.promo == promo)

    total = query.count()
    offset = (page - 1) * page_size
    products = query.order_by(Product.id).offset(offset).limit(page_size).all()

    return ProductListResponse(
        products=[ProductResponse.model_validate(product) for product in products],
        total=total,
        page=page,
        page_size=page_size
    )


@router.get("/products/{product_id}", response_model=ProductResponse, summary="Get a product")
def get_product(product_id: int, db: Session = Depends(get_db)):
    product = db.get(Product, product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with ID {product_id} not found"
        )
    return product


@router.get("/categories", response_model=List[CategoryResponse], summary="Get categories")
def get_categories(db: Session = Depends(get_db)):
    return db.query(Category).order_by(Category.name).all()


# Offers endpoint
class OffersPageResponse(BaseModel):
    """Resolved offers page: configuration plus the products it points at."""
    config: OffersConfig
    deal_of_the_day: Optional[ProductResponse] = None
    products: List[ProductResponse]


@router.get("/offers", response_model=OffersPageResponse, summary="Get the offers page")
def get_offers(db: Session = Depends(get_db)):
    """
    Resolve the stored offers configuration against its defaults and pick the
    deal of the day and the grid products from the catalog.
    """
    config = resolve_config(get_offers_record(db).document)
    catalog = db.query(Product).order_by(Product.id).all()

    deal = select_deal_of_the_day(config.deal_of_the_day, catalog)
    grid = select_grid_products(config.all_offers_grid, catalog)

    return OffersPageResponse(
        config=config,
        deal_of_the_day=ProductResponse.model_validate(deal) if deal is not None else None,
        products=[ProductResponse.model_validate(product) for product in grid]
    )


# Cart endpoints
class AddToCartRequest(BaseModel):
    """Request body for adding a product to the cart."""
    product_id: int = Field(..., description="Product to add")
    quantity: int = Field(1, description="Units to add; zero or less is ignored")


class UpdateCartItemRequest(BaseModel):
    """Request body for setting an item's quantity."""
    quantity: int = Field(..., description="New quantity; zero or less removes the item")


class CartItemResponse(BaseModel):
    """Cart item response model."""
    product_id: int
    product_name: str
    quantity: int
    unit_price: float
    subtotal: float
    image_url: Optional[str] = None


class CartResponse(BaseModel):
    """Cart response model."""
    items: List[CartItemResponse]
    item_count: int
    subtotal: float
    subtotal_formatted: str
    shipping_fee: float
    shipping_fee_formatted: str
    remaining_for_free_shipping: float
    remaining_for_free_shipping_formatted: str
    shipping_progress_percent: float
    free_shipping: bool
    grand_total: float
    grand_total_formatted: str


def _ensure_stock(product: Product, requested: int):
    if requested > product.quantity:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Insufficient stock. Only {product.quantity} available for '{product.name}'."
        )


@router.get("/cart", response_model=CartResponse, summary="Get user's cart")
def get_cart(cart: Cart = Depends(get_existing_cart)):
    """
    Get the current user's shopping cart.

    Cart is kept in memory per session (derived from the client IP).
    """
    return CartResponse(**cart.summary())


@router.post("/cart/items", response_model=CartResponse, summary="Add a product to the cart")
def add_to_cart(
    request: AddToCartRequest,
    cart: Cart = Depends(get_session_cart),
    db: Session = Depends(get_db)
):
    """Add a product, or add more units of a product already in the cart."""
    product = db.get(Product, request.product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with ID {request.product_id} not found"
        )

    if request.quantity > 0:
        existing = cart.get_item(product.id)
        _ensure_stock(product, request.quantity + (existing.quantity if existing else 0))

    cart.add_item(product, request.quantity)
    return CartResponse(**cart.summary())


@router.put("/cart/items/{product_id}", response_model=CartResponse, summary="Set an item's quantity")
def update_cart_item(
    product_id: int,
    request: UpdateCartItemRequest,
    session_id: str = Depends(get_session_id),
    cart_manager: CartManager = Depends(get_cart_manager),
    cart: Cart = Depends(get_existing_cart),
    db: Session = Depends(get_db)
):
    """Set the quantity of an item. Unknown items are ignored."""
    if product_id in cart and request.quantity > 0:
        product = db.get(Product, product_id)
        if product is not None:
            _ensure_stock(product, request.quantity)

    cart.update_quantity(product_id, request.quantity)
    if len(cart) == 0:
        cart_manager.discard(session_id)
    return CartResponse(**cart.summary())


@router.delete("/cart/items/{product_id}", response_model=CartResponse, summary="Remove an item")
def remove_cart_item(
    product_id: int,
    session_id: str = Depends(get_session_id),
    cart_manager: CartManager = Depends(get_cart_manager),
    cart: Cart = Depends(get_existing_cart)
):
    cart.remove_item(product_id)
    if len(cart) == 0:
        cart_manager.discard(session_id)
    return CartResponse(**cart.summary())


@router.delete("/cart", response_model=CartResponse, summary="Empty the cart")
def clear_cart(
    session_id: str = Depends(get_session_id),
    cart_manager: CartManager = Depends(get_cart_manager),
    cart: Cart = Depends(get_existing_cart)
):
    cart.clear()
    cart_manager.discard(session_id)
    return CartResponse(**cart.summary())


# Checkout and order endpoints
def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        session_id=order.session_id,
        first_name=order.first_name,
        last_name=order.last_name,
        city=order.city,
        payment_method=order.payment_method,
        subtotal=float(order.subtotal),
        shipping_fee=float(order.shipping_fee),
        fiscal_stamp=float(order.fiscal_stamp),
        total_amount=float(order.total_amount),
        total_formatted=format_amount(order.total_amount, settings.currency_label),
        status=order.status,
        created_at=order.created_at.isoformat(),
        items=[
            OrderItemResponse(
                id=item.id,
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=float(item.unit_price),
                subtotal=float(item.subtotal)
            )
            for item in order.items
        ]
    )


@router.post(
    "/checkout",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Place an order from the cart"
)
def checkout(
    request: CheckoutRequest,
    session_id: str = Depends(get_session_id),
    cart_manager: CartManager = Depends(get_cart_manager),
    cart: Cart = Depends(get_existing_cart),
    db: Session = Depends(get_db)
):
    """
    Turn the session's cart into an order.

    Stock is checked and decremented for every line, with the product rows
    locked until the order commits. The order total is the cart grand total
    plus the fiscal stamp. The session's cart is discarded afterwards.
    No payment is taken here.
    """
    if len(cart) == 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cart is empty"
        )

    order = Order(
        session_id=session_id,
        first_name=request.customer.first_name,
        last_name=request.customer.last_name,
        email=request.customer.email,
        phone=request.customer.phone,
        address=request.customer.address,
        address2=request.customer.address2,
        postal_code=request.customer.postal_code,
        city=request.customer.city,
        country=request.customer.country,
        payment_method=request.payment_method,
        subtotal=cart.subtotal,
        shipping_fee=cart.shipping_fee,
        fiscal_stamp=cart.fiscal_stamp,
        total_amount=cart.checkout_total,
        status="pending"
    )

    for item in cart.items:
        product = db.query(Product).filter(
            Product.id == item.product_id
        ).with_for_update().first()
        if product is None or item.quantity > product.quantity:
            # Undo stock changes made for earlier lines
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"'{item.product_name}' is no longer available in the requested quantity"
            )

        product.quantity -= item.quantity
        order.items.append(OrderItem(
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=item.quantity,
            unit_price=item.unit_price,
            subtotal=item.subtotal
        ))

    db.add(order)
    db.commit()
    db.refresh(order)

    logger.info("[CHECKOUT] Order %s placed by %s, total %s", order.id, session_id, order.total_amount)
    cart_manager.discard(session_id)

    return _order_response(order)


@router.get("/orders", response_model=List[OrderResponse], summary="Get user's orders")
def get_orders(
    session_id: str = Depends(get_session_id),
    db: Session = Depends(get_db)
):
    """
    Get all orders for the current user, newest first.
    """
    orders = db.query(Order).filter(
        Order.session_id == session_id
    ).order_by(Order.created_at.desc(), Order.id.desc()).all()

    return [_order_response(order) for order in orders]
