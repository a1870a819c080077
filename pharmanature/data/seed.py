"""Seed catalog for a fresh storefront database."""
import logging
from decimal import Decimal
from typing import Dict, List, Any
from sqlalchemy.orm import Session
from pharmanature.data.database.product_model import Product, Category
from pharmanature.data.database.offers_model import get_offers_record

logger = logging.getLogger(__name__)

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "name": "Sérum Éclat Vitamine C Liposomale - 15%",
        "brand": "L-DERMA LAB",
        "price": Decimal("89.000"),
        "old_price": Decimal("115.000"),
        "image_url": "https://images.unsplash.com/photo-1570172619383-2ef40176191a?q=80&w=600&auto=format&fit=crop",
        "images": ["https://images.unsplash.com/photo-1570172619383-2ef40176191a?q=80&w=600&auto=format&fit=crop"],
        "discount": 22,
        "category": "Dermo-cosmétique",
        "promo": True,
        "description": "Solution antioxydante haute performance pour un teint rayonnant.",
        "quantity": 85,
        "specifications": [{"name": "Volume", "value": "30ml"}, {"name": "Usage", "value": "Quotidien"}],
    },
    {
        "id": 2,
        "name": "Baume Réparateur Intense - Peaux Sensibles",
        "brand": "BIO-BOTANIC",
        "price": Decimal("45.500"),
        "image_url": "https://images.unsplash.com/photo-1556228720-195a672e8a03?q=80&w=600&auto=format&fit=crop",
        "images": [],
        "category": "Dermo-cosmétique",
        "description": "Soin apaisant immédiat pour les irritations cutanées.",
        "quantity": 120,
        "specifications": [],
    },
]

SEED_CATEGORIES: List[Dict[str, Any]] = [
    {"name": "Micronutrition", "sub_categories": ["Vitamines", "Sommeil", "Énergie"]},
    {"name": "Dermo-cosmétique", "sub_categories": ["Visage", "Corps", "Cheveux"]},
    {"name": "Solaire", "sub_categories": ["SPF 50+", "Après-Soleil"]},
    {"name": "Bébé & Maman", "sub_categories": ["Hygiène", "Lait Maternisé"]},
    {"name": "Bio & Naturel", "sub_categories": ["Huiles Essentielles", "Tisanes"]},
]


def seed_database(db: Session) -> Dict[str, int]:
    """
    Insert seed products and categories that are not there yet, and make sure
    the offers configuration row exists. Safe to run on every startup.

    Returns:
        Counts of inserted products and categories
    """
    inserted = {"products": 0, "categories": 0}

    for data in SEED_PRODUCTS:
        if db.get(Product, data["id"]) is None:
            db.add(Product(**data))
            inserted["products"] += 1

    for data in SEED_CATEGORIES:
        if db.get(Category, data["name"]) is None:
            db.add(Category(**data))
            inserted["categories"] += 1

    db.commit()
    get_offers_record(db)

    logger.info(
        "[SEED] Inserted %d products and %d categories",
        inserted["products"], inserted["categories"]
    )
    return inserted
