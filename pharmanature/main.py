"""Main FastAPI application."""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pharmanature.config import settings
from pharmanature.routes.admin import router as admin_router
from pharmanature.routes.user import router as user_router
from pharmanature.data.database.connection import engine, Base, SessionLocal
# Import models so their tables are registered before create_all
from pharmanature.data.database.product_model import Product, Category
from pharmanature.data.database.order_models import Order, OrderItem
from pharmanature.data.database.offers_model import OffersConfigRecord
from pharmanature.data.seed import seed_database
from pharmanature.utils.cart import CartManager

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)

if settings.seed_on_startup:
    db = SessionLocal()
    try:
        seed_database(db)
    finally:
        db.close()

# Initialize FastAPI app
app = FastAPI(
    title=settings.project_name,
    version=settings.api_version,
    description="PharmaNature storefront - catalog, offers, cart and checkout API"
)

# One cart per session, shared by all requests of this process
app.state.cart_manager = CartManager(
    free_shipping_threshold=settings.free_shipping_threshold,
    shipping_fee=settings.shipping_fee,
    fiscal_stamp=settings.fiscal_stamp,
    currency=settings.currency_label
)
logger.info("Cart manager ready (free shipping from %s %s)", settings.free_shipping_threshold, settings.currency_label)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(admin_router)
app.include_router(user_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "PharmaNature Storefront API",
        "version": settings.api_version,
        "docs": "/docs"
    }


@app.head("/health")
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
